# src/campus_commons/api/__init__.py
"""HTTP API packages."""
