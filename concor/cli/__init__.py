"""Command-line interface for the Concor engine."""

from .main import app, main

__all__ = ["app", "main"]
