"""
CLI module for Stowage - contains command-line interface components.
"""

from stowage.cli.app import cli, main

__all__ = ["cli", "main"]
