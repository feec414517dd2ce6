"""Export for the product database."""
