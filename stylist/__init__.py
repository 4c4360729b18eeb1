"""AI stylist wizard: outfit recommendation gateway and client wizard."""

__version__ = "0.1.0"
