"""Core PNG building blocks: chunk types, Adam7 interlacing, pixel format rules and header metadata."""

__version__ = "0.1.0"

__all__ = ["adam7", "chunk", "metadata", "types"]