"""Jai Metro: daily numbers and yearly week charts behind a small JSON API."""

__version__ = "0.1.0"
