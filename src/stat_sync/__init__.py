"""Batch sync of external video statistics into record store fields."""

__version__ = "0.1.0"
