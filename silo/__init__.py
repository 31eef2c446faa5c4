"""Read Engram observations and curated vault notes, and build identity profiles."""

__version__ = "0.1.0"

__all__ = ["__version__"]