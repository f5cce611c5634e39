import json
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

from .models import TopUniversity

DATA_FILE = Path(__file__).parent / "data" / "top_universities.json"

# Order of the country buttons on the page
TOP_COUNTRIES = (
    "USA",
    "Canada",
    "China",
    "Japan",
    "South Korea",
    "Singapore",
    "Hong Kong",
    "Taiwan",
    "Philippines",
    "Indonesia",
    "Malaysia",
    "Vietnam",
)


def load_top_universities(
    path: Path = DATA_FILE,
) -> Mapping[str, tuple[TopUniversity, ...]]:
    """Load the bundled ranking table as a read-only mapping.

    Each country maps to its universities in rank order (rank 1 first).
    """
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    return MappingProxyType(
        {
            country: tuple(TopUniversity.model_validate(item) for item in entries)
            for country, entries in data.items()
        }
    )


TOP_UNIVERSITIES = load_top_universities()


def lookup_top_universities(country: str) -> tuple[TopUniversity, ...]:
    return TOP_UNIVERSITIES.get(country, ())
