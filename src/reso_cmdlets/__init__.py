"""Cmdlet framework with a lifecycle base class, log bridging, and test helpers."""

__version__ = "0.1.0"
