"""Pomodesk: a focus/break interval timer for the desktop."""

__version__ = "0.1.0"
