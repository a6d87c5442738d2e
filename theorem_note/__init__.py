"""Theorem Note backend: note directories, file editing and theorem cross-references."""

__version__ = "0.1.0"
