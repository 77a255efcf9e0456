"""Versioned, thread-safe settings store for a load order manager."""

__version__ = "0.1.0"
