"""Social-card thumbnail proxy."""

__version__ = "0.1.0"
