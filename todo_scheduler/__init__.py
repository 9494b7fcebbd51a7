"""Task scheduler with repeating tasks."""

__version__ = "1.0.0"
