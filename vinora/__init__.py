"""Vinora - wine stock and sales tracking."""

__version__ = "0.3.0"
