"""Keyword-based product categorization for boutique catalog images."""

__version__ = "0.1.0"
