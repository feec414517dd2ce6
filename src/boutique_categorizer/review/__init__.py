"""Interactive review prompts."""
