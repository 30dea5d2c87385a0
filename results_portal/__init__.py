"""Examination results lookup, whole-class scanning and CSV export."""

__version__ = "0.1.0"
