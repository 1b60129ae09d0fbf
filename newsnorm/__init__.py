"""Normalize news article markup into structured records and harvest article links."""

__version__ = "0.3.0"
