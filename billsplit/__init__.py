"""Receipt OCR item extraction for splitting a bill."""

__version__ = "0.1.0"
