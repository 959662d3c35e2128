"""A robot that teaches Japanese kana flag semaphore, plus BMP helpers."""

__version__ = "1.0.0"