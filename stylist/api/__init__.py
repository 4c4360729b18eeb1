"""HTTP gateway exposing the outfit and image endpoints."""
