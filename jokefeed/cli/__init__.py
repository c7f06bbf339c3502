"""Command line interface."""

from jokefeed.cli.main import cli


__all__ = ["cli"]
