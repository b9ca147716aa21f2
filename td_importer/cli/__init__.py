"""Command line interface (``td-import``)."""

from .main import main

__all__ = ["main"]
