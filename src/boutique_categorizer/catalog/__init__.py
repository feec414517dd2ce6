"""Category registry."""
