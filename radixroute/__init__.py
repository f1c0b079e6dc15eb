"""Radix-tree URL routing with path parameters and trailing-slash hints, plus small routing helpers."""

__version__ = "1.4.0.dev0"
__all__ = ["tree", "utils"]