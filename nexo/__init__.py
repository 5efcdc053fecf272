"""NEXO Coach: AI recommendation pipeline and backend API clients."""

__version__ = "0.1.0"
