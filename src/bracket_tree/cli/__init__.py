"""Command-line interface for inspecting bracket notation trees."""

from .main import main

__all__ = ["main"]
