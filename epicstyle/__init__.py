"""Coding-style checker for C source and header files."""

__version__ = "0.1.0"