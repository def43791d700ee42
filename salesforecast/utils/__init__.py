"""Logging and error presentation helpers."""
