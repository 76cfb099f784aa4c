"""Command line interface for dirwatch."""

from .main import main

__all__ = ['main']
