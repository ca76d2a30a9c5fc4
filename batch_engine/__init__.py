"""Batch cooking strategy and adaptive adjustment engine for catered events."""

__version__ = "1.0.0"
