"""Media extraction helpers for social and streaming sites."""

__version__ = "0.1.0"