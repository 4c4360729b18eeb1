"""Business services behind the gateway routes."""
