"""Operational entry points."""
