"""Keyword classification of product images."""
