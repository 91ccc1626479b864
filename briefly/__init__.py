"""Structural project and file summaries."""

__version__ = "0.1.0"
