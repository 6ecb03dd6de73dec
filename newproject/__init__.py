"""Materialize new projects from template recipes."""

__version__ = "0.1.0"
