"""Statistics and report artifacts."""
