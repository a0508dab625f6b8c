"""
Halting analysis command-line interface.

Provides CLI commands for analyzing topology files.
"""

from halting.cli.main import app

__all__ = [
    "app",
]
