"""Decider: share a list, get one item back."""

__version__ = "1.0.0"
