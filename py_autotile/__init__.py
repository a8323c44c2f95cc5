"""Procedural coast16 autotile synthesis."""

__version__ = "0.1.0"
