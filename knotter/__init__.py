"""Data types, HTTP client and client-side logic for a shared globe of balls."""

__version__ = "0.1.0"