"""toolspec — resolve project tool commands into runnable process specs."""

__version__ = "0.1.0"
