"""Tests for the command-line interface."""

import json

import pytest
import yaml
from click.testing import CliRunner

from boutique_categorizer.cli import cli

from conftest import SMALL_CATALOG


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def dirs(tmp_path):
    images = tmp_path / "images"
    images.mkdir()
    for name in ["bridal_lehenga_red.jpg", "random_item_xyz.jpg", "notes.txt"]:
        (images / name).write_text("")
    data = tmp_path / "data"
    return images, data


def invoke(runner, dirs, *args, **kwargs):
    images, data = dirs
    return runner.invoke(
        cli,
        ["--data-dir", str(data), "--images-dir", str(images), *args],
        **kwargs,
    )


def load_mapping(dirs):
    return json.loads((dirs[1] / "image-categories.json").read_text())


def test_auto(runner, dirs):
    """Test automatic categorization end to end."""
    result = invoke(runner, dirs, "auto", "--threshold", "50")

    assert result.exit_code == 0, result.output
    mapping = load_mapping(dirs)
    assert set(mapping) == {"bridal_lehenga_red.jpg", "random_item_xyz.jpg"}
    assert mapping["bridal_lehenga_red.jpg"]["category"] == "lehenga"
    assert "needsReview" not in mapping["bridal_lehenga_red.jpg"]
    assert mapping["random_item_xyz.jpg"]["needsReview"] is True
    assert (dirs[1] / "categorization-stats.json").exists()


def test_auto_refuses_corrupt_mapping(runner, dirs):
    """Test that a corrupt mapping file is not overwritten."""
    dirs[1].mkdir()
    mapping_file = dirs[1] / "image-categories.json"
    mapping_file.write_text("{oops")

    result = invoke(runner, dirs, "auto")

    assert result.exit_code == 1
    assert mapping_file.read_text() == "{oops"


def test_auto_force_overwrites_corrupt_mapping(runner, dirs):
    """Test overwriting a corrupt mapping on request."""
    dirs[1].mkdir()
    (dirs[1] / "image-categories.json").write_text("{oops")

    result = invoke(runner, dirs, "auto", "--force")

    assert result.exit_code == 0, result.output
    assert len(load_mapping(dirs)) == 2
    assert (dirs[1] / "image-categories-backup.json").read_text() == "{oops"


def test_review_needs_review_only(runner, dirs):
    """Test resolving a flagged image through the prompt."""
    invoke(runner, dirs, "auto", "--threshold", "50")

    result = invoke(runner, dirs, "review", "--needs-review-only", input="1\n\n\n")

    assert result.exit_code == 0, result.output
    record = load_mapping(dirs)["random_item_xyz.jpg"]
    assert record["category"] == "lehenga"
    assert record["confidence"] == 100
    assert record["manuallyReviewed"] is True
    assert "needsReview" not in record


def test_review_quit(runner, dirs):
    """Test quitting the review loop straight away."""
    invoke(runner, dirs, "auto", "--threshold", "50")

    result = invoke(runner, dirs, "review", input="q\n")

    assert result.exit_code == 0, result.output
    assert load_mapping(dirs)["random_item_xyz.jpg"]["needsReview"] is True


def test_review_refuses_corrupt_mapping(runner, dirs):
    """Test that review stops before prompting on a corrupt mapping."""
    dirs[1].mkdir()
    mapping_file = dirs[1] / "image-categories.json"
    mapping_file.write_text("{oops")

    result = invoke(runner, dirs, "review", input="1\n\n\n")

    assert result.exit_code == 1
    assert "Enter choice" not in result.output
    assert mapping_file.read_text() == "{oops"


def test_review_closed_input_keeps_decisions(runner, dirs):
    """Test that running out of input saves the decisions made."""
    result = invoke(runner, dirs, "review", input="1\n\n\n")

    assert result.exit_code == 0, result.output
    mapping = load_mapping(dirs)
    assert list(mapping) == ["bridal_lehenga_red.jpg"]
    assert mapping["bridal_lehenga_red.jpg"]["manuallyReviewed"] is True


def test_report(runner, dirs):
    """Test report generation."""
    invoke(runner, dirs, "auto", "--threshold", "50")

    result = invoke(runner, dirs, "report")

    assert result.exit_code == 0, result.output
    report = json.loads((dirs[1] / "categorization-report.json").read_text())
    assert report["summary"]["totalImages"] == 2
    assert report["summary"]["needsReview"] == 1
    assert (dirs[1] / "categorization-report.md").exists()


def test_report_without_mapping(runner, dirs):
    """Test that reporting needs a mapping file."""
    result = invoke(runner, dirs, "report")
    assert result.exit_code == 1


def test_stats(runner, dirs):
    """Test showing statistics before and after a run."""
    result = invoke(runner, dirs, "stats")
    assert "No statistics available yet" in result.output

    invoke(runner, dirs, "auto")
    result = invoke(runner, dirs, "stats")
    assert '"totalImages": 2' in result.output


def test_categories(runner, dirs):
    """Test listing categories."""
    result = invoke(runner, dirs, "categories")

    assert result.exit_code == 0
    assert "lehenga" in result.output
    assert "accessories" in result.output


def test_classify(runner, dirs):
    """Test classifying a single filename."""
    result = invoke(runner, dirs, "classify", "random_item_xyz.jpg")

    assert result.exit_code == 0, result.output
    assert '"needsReview": true' in result.output
    assert '"category": "dress"' in result.output


def test_classify_with_custom_categories(runner, dirs, tmp_path):
    """Test loading categories from a YAML file."""
    config = tmp_path / "categories.yaml"
    config.write_text(yaml.safe_dump(SMALL_CATALOG))

    result = invoke(runner, dirs, "--categories", str(config), "classify", "hat.jpg")

    assert result.exit_code == 0, result.output
    assert '"category": "hat"' in result.output


def test_suggest(runner, dirs):
    """Test product suggestions."""
    result = invoke(runner, dirs, "suggest", "gown", "--count", "2", "--seed", "1")

    assert result.exit_code == 0
    assert "Premium Evening Gown" in result.output
    assert "Designer Evening Gown" in result.output
    assert "Elegant Evening Gown" not in result.output


def test_suggest_unknown_category(runner, dirs):
    """Test suggestions for a category that does not exist."""
    result = invoke(runner, dirs, "suggest", "spaceship")
    assert result.exit_code == 1


def test_export_updates(runner, dirs, tmp_path):
    """Test exporting product database updates."""
    invoke(runner, dirs, "auto")
    output = tmp_path / "updates.json"

    result = invoke(runner, dirs, "export-updates", "--output", str(output))

    assert result.exit_code == 0, result.output
    images = {u["image"] for u in json.loads(output.read_text())}
    assert images == {"bridal_lehenga_red.jpg", "random_item_xyz.jpg"}


def test_validate(runner, dirs):
    """Test configuration validation."""
    result = invoke(runner, dirs, "validate")

    assert result.exit_code == 0, result.output
    assert "All validations passed!" in result.output
