"""Allow ``python -m boutique_categorizer``."""

from .cli import main

main()
