"""scicalc -- single-line scientific expression calculator."""

__version__ = "0.1.0"
