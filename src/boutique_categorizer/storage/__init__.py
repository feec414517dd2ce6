"""Persistence of categorization results."""
