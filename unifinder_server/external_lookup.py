import logging
from typing import Any, Optional

import requests

logger = logging.getLogger(__name__)


class UpstreamStatusError(Exception):
    """The upstream API answered with a non-2xx status."""

    def __init__(self, url: str, status_code: int):
        super().__init__(f"{url} returned HTTP {status_code}")
        self.url = url
        self.status_code = status_code


class TransportError(Exception):
    """The upstream call failed before a usable response was read."""


def forward_get(url: str, params: dict, timeout: Optional[float] = None) -> Any:
    """GET ``url`` with ``params`` and return the decoded JSON body untouched."""
    try:
        response = requests.get(url, params=params, timeout=timeout)
    except requests.RequestException as e:
        logger.warning(f"Request to {url} failed: {e}")
        raise TransportError(str(e)) from e

    if not 200 <= response.status_code < 300:
        logger.warning(f"{url} answered {response.status_code} for {params}")
        raise UpstreamStatusError(url, response.status_code)

    try:
        return response.json()
    except ValueError as e:
        logger.warning(f"Malformed JSON from {url}: {e}")
        raise TransportError(str(e)) from e


def search_universities(
    url: str, country: str, timeout: Optional[float] = None
) -> Any:
    """Lookup universities for a country via the Hipolabs directory."""
    return forward_get(url, {"country": country}, timeout=timeout)


def search_rankings(
    url: str, country: str, region: str, timeout: Optional[float] = None
) -> Any:
    # Upstream contract is unconfirmed; parameters are forwarded as given.
    return forward_get(url, {"country": country, "region": region}, timeout=timeout)
