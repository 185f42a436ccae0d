"""Handwritten letter translator backend."""

__version__ = "0.1.0"
