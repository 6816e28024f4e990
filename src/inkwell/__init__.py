"""Inkwell blog platform: posts, comments and IP-keyed comment voting."""

__version__ = "0.1.0"
