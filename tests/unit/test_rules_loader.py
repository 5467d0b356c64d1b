"""
Rules loader tests.

Verifies that rules.yaml loads, that omitted sections fall back to
defaults and that bad files fail loudly with ValueError.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from festival_catalog.rules import load_rules
from festival_catalog.rules.models import Rules


def write_rules(tmp_path: Path, content: str) -> Path:
    path = tmp_path / "rules.yaml"
    path.write_text(content)
    return path


class TestRulesLoading:
    def test_project_rules_file(self, rules: Rules) -> None:
        assert rules.storage.favorites_key == "{festival_id}_favorites"
        assert rules.catalog.drinks_staleness_seconds == 3600
        assert rules.catalog.default_sort == "name_asc"

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_rules(tmp_path / "absent.yaml")

    def test_empty_file_means_defaults(self, tmp_path: Path) -> None:
        assert load_rules(write_rules(tmp_path, "")) == Rules()

    def test_partial_sections(self, tmp_path: Path) -> None:
        rules = load_rules(write_rules(tmp_path, "catalog:\n  default_sort: abv_high\n"))
        assert rules.catalog.default_sort == "abv_high"
        assert rules.catalog.clear_styles_on_category_change is True
        assert rules.storage == Rules().storage

    def test_yaml_fence_stripped(self, tmp_path: Path) -> None:
        content = "# Rules\n\nSome prose.\n\n```yaml\ncatalog:\n  drinks_staleness_seconds: 60\n```\n"
        rules = load_rules(write_rules(tmp_path, content))
        assert rules.catalog.drinks_staleness_seconds == 60


class TestRulesValidation:
    def test_invalid_yaml(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="Invalid YAML"):
            load_rules(write_rules(tmp_path, "catalog: [unclosed"))

    def test_unknown_section(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="Rules validation failed"):
            load_rules(write_rules(tmp_path, "analytics:\n  enabled: true\n"))

    def test_unknown_sort_key(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="Rules validation failed"):
            load_rules(write_rules(tmp_path, "catalog:\n  default_sort: price\n"))

    def test_negative_staleness(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError):
            load_rules(write_rules(tmp_path, "catalog:\n  drinks_staleness_seconds: -1\n"))
