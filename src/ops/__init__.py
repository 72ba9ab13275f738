"""Operational utilities."""
