"""State and rendering rules of the University Finder page.

The controller owns every piece of page state and knows nothing about Qt, so
the widget in ``main.py`` only forwards user actions here and redraws from the
row/placeholder helpers.
"""

import logging
from typing import Callable, Mapping, NamedTuple, Optional, Sequence

import requests

from .api import find_universities
from .models import TopUniversity
from .rankings import lookup_top_universities

logger = logging.getLogger(__name__)

NOT_AVAILABLE = "N/A"
NO_DOMAINS = "No domains available"
NO_COUNTRY_SELECTED = "Please select a country"
FETCH_FAILED = "Failed to fetch universities"
NO_UNIVERSITIES = "No universities found."
SELECT_TOP_COUNTRY = "Select a country to see top universities."
LOADING = "Loading..."


class Link(NamedTuple):
    text: str
    href: str


class UniversityRow(NamedTuple):
    name: str
    code: str
    country: str
    state_province: str
    domains: list[Link]  # Empty -> render NO_DOMAINS


class RankingRow(NamedTuple):
    rank: int
    name: str
    city: str
    state: str
    website: Optional[Link]  # None -> render NOT_AVAILABLE


def as_link(domain: str) -> Link:
    return Link(domain, f"http://{domain}")


def university_row(record: dict) -> UniversityRow:
    return UniversityRow(
        name=record.get("name") or "",
        code=record.get("alpha_two_code") or "",
        country=record.get("country") or "",
        state_province=record.get("state-province") or NOT_AVAILABLE,
        domains=[as_link(domain) for domain in record.get("domains") or []],
    )


def ranking_row(rank: int, university: TopUniversity) -> RankingRow:
    return RankingRow(
        rank=rank,
        name=university.name,
        city=university.city or NOT_AVAILABLE,
        state=university.state or NOT_AVAILABLE,
        website=as_link(university.website) if university.website else None,
    )


class PageController:
    def __init__(
        self,
        fetch_universities: Callable[[str], list] = find_universities,
        lookup_top: Callable[[str], Sequence[TopUniversity]] = lookup_top_universities,
    ):
        self._fetch_universities = fetch_universities
        self._lookup_top = lookup_top

        self.countries: list[str] = []
        self.selected_country = ""
        self.universities: list = []
        self.error: Optional[str] = None
        self.loading = False
        self.selected_top_country: Optional[str] = None
        self.top_universities: Sequence[TopUniversity] = ()

        self._latest_token = 0

    # --- Country selector ---
    def set_countries(self, countries: list[str]):
        self.countries = list(countries)

    def select_country(self, country: str):
        self.selected_country = country

    # --- Find Universities ---
    def start_find(self) -> Optional[int]:
        """Begin a lookup and return its token, or None when nothing is selected."""
        if not self.selected_country:
            self.error = NO_COUNTRY_SELECTED
            return None

        self._latest_token += 1
        self.loading = True
        return self._latest_token

    def is_current(self, token: int) -> bool:
        return token == self._latest_token

    def complete_find(self, token: int, universities: list) -> bool:
        """Apply a successful lookup. Returns False when it was superseded."""
        if not self.is_current(token):
            logger.debug(f"Dropping stale lookup result (token {token})")
            return False
        # Items that are not records (e.g. null) have nothing to render
        self.universities = [u for u in universities if isinstance(u, Mapping)]
        self.error = None
        self.loading = False
        return True

    def fail_find(self, token: int, reason: object = None) -> bool:
        if not self.is_current(token):
            logger.debug(f"Dropping stale lookup failure (token {token})")
            return False
        logger.warning(f"Fetch error: {reason}")
        self.error = FETCH_FAILED
        self.universities = []
        self.loading = False
        return True

    def fetch(self, country: str) -> list:
        return self._fetch_universities(country)

    def find(self):
        """Run a whole lookup on the calling thread."""
        token = self.start_find()
        if token is None:
            return
        try:
            universities = self.fetch(self.selected_country)
        except (requests.RequestException, ValueError) as e:
            self.fail_find(token, e)
        else:
            self.complete_find(token, universities)

    # --- Top universities ---
    def select_top_country(self, country: str):
        # Static lookup, no suspension point, so `loading` is left alone.
        self.selected_top_country = country
        self.top_universities = tuple(self._lookup_top(country))

    # --- Rendering ---
    def university_rows(self) -> list[UniversityRow]:
        return [university_row(record) for record in self.universities]

    def ranking_rows(self) -> list[RankingRow]:
        return [
            ranking_row(rank, university)
            for rank, university in enumerate(self.top_universities, start=1)
        ]

    def universities_placeholder(self) -> Optional[str]:
        if self.universities or self.error:
            return None
        return NO_UNIVERSITIES

    def rankings_placeholder(self) -> Optional[str]:
        if self.loading:
            return LOADING
        if self.top_universities or self.selected_top_country is not None:
            return None
        return SELECT_TOP_COUNTRY


def connection_status(connected: bool) -> tuple[str, str]:
    """Status label text and colour. Find stays usable either way."""
    if connected:
        return "Status: Connected", "green"
    return "Status: Disconnected", "red"
