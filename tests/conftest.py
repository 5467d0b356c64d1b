from datetime import UTC, datetime
from pathlib import Path

import pytest

from festival_catalog.adapters.clock import FixedClock
from festival_catalog.adapters.memory_kv import InMemoryKeyValueStore
from festival_catalog.rules.loader import load_rules
from festival_catalog.rules.models import Rules


FESTIVAL_START = datetime(2025, 5, 20, 12, 0, 0, tzinfo=UTC)


@pytest.fixture
def rules() -> Rules:
    """Load the REAL rules file from the project root."""
    rules_path = Path(__file__).resolve().parent.parent / "rules.yaml"
    if not rules_path.exists():
        raise FileNotFoundError(f"Rules not found at {rules_path}")
    return load_rules(rules_path)


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(FESTIVAL_START)


@pytest.fixture
def memory_backend() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def sample_payload() -> dict:
    return {
        "producers": [
            {
                "id": "p1",
                "name": "Oakham Ales",
                "location": "Peterborough",
                "products": [
                    {
                        "id": "d1",
                        "name": "Citra",
                        "category": "beer",
                        "style": "IPA",
                        "abv": "4.2",
                        "dispense": "cask",
                        "status_text": "Plenty left",
                        "bar": "Main",
                        "allergens": {"gluten": 1},
                    },
                    {
                        "id": "d2",
                        "name": "Inferno",
                        "category": "beer",
                        "style": "Golden Ale",
                        "abv": 4.5,
                        "status_text": "Sold out",
                    },
                ],
            },
            {
                "id": "p2",
                "name": "Cambridge Cider Co",
                "products": [
                    {
                        "id": "d3",
                        "name": "Orchard Gold",
                        "category": "cider",
                        "abv": 6,
                        "status_text": "Not yet available",
                        "bar": 3,
                    },
                ],
            },
        ]
    }
