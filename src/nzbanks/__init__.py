"""nzbanks — New Zealand bank account identification and validation."""

__version__ = "0.1.0"
