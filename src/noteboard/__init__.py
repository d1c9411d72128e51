"""Noteboard: forum and notes backend API."""

__version__ = "0.1.0"
