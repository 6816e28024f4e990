"""Operational scripts for Inkwell."""
