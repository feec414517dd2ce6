"""Batch categorization and review workflow."""
