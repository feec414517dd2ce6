"""Shared fixtures."""

import pytest

from boutique_categorizer.batch.orchestrator import BatchCategorizer
from boutique_categorizer.catalog.registry import CategoryRegistry
from boutique_categorizer.categorization.classifier import Classifier
from boutique_categorizer.storage.store import MappingStore

SMALL_CATALOG = {
    "categories": [
        {
            "key": "hat",
            "display_name": "Hat",
            "description": "Headwear",
            "keywords": ["hat", "cap", "beanie"],
            "tags": ["headwear"],
            "price_range": {"min": 100, "max": 500},
            "seasonal_fit": ["winter"],
            "color_category": ["versatile"],
        },
        {
            "key": "scarf",
            "display_name": "Scarf",
            "description": "Neckwear",
            "keywords": ["scarf", "wrap", "shawl", "muffler", "bandana"],
            "tags": ["neckwear", "accessories"],
            "price_range": {"min": 200, "max": 900},
            "seasonal_fit": ["winter", "autumn"],
            "color_category": ["versatile", "casual"],
        },
        {
            "key": "top",
            "display_name": "Top",
            "description": "Upper garment",
            "keywords": ["silk", "blouse"],
            "tags": ["casual"],
            "price_range": {"min": 300, "max": 1200},
        },
        {
            "key": "bottom",
            "display_name": "Bottom",
            "description": "Lower garment",
            "keywords": ["silk", "skirt"],
            "tags": ["casual"],
            "price_range": {"min": 300, "max": 1500},
        },
    ],
    "fallback": {
        "key": "top",
        "display_name": "Top",
        "description": "Unsorted garment",
        "tags": ["unsorted"],
        "suggested_keywords": ["top"],
    },
    "related": {"hat": ["scarf"], "scarf": ["hat", "top"]},
    "colors": ["red", "blue"],
}


class ScriptedReviewer:
    """Reviewer answering prompts from a fixed list."""

    def __init__(self, answers):
        self.answers = list(answers)
        self.questions = []
        self.messages = []

    def ask(self, question):
        if not self.answers:
            raise EOFError
        self.questions.append(question)
        return self.answers.pop(0)

    def show(self, message):
        self.messages.append(message)

    @property
    def transcript(self):
        return "\n".join(self.messages)


@pytest.fixture
def registry():
    """Packaged boutique categories."""
    return CategoryRegistry.default()


@pytest.fixture
def classifier(registry):
    return Classifier(registry)


@pytest.fixture
def small_registry():
    return CategoryRegistry.from_dict(SMALL_CATALOG)


@pytest.fixture
def small_classifier(small_registry):
    return Classifier(small_registry)


@pytest.fixture
def store(tmp_path):
    return MappingStore(
        mapping_file=tmp_path / "image-categories.json",
        backup_file=tmp_path / "image-categories-backup.json",
        stats_file=tmp_path / "categorization-stats.json",
    )


@pytest.fixture
def batch(small_classifier, store):
    return BatchCategorizer(small_classifier, store=store)
