"""Synchronize a OneDrive folder tree with an Excel worksheet outline."""

__version__ = "0.1.0"
