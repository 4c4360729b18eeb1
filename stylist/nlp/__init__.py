"""Prompt construction and model output parsing."""
