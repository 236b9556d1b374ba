"""Role-gated multiple-choice quiz API."""

__version__ = "1.0.0"
