import locale
import logging
import unicodedata

import requests

from .config import countries_url

logger = logging.getLogger(__name__)


def _plain_key(name: str) -> tuple[str, str]:
    # Accents stripped and case folded; the raw name breaks ties.
    decomposed = unicodedata.normalize("NFKD", name)
    base = "".join(c for c in decomposed if not unicodedata.combining(c))
    return base.casefold(), name


def collation_key(name: str):
    """Sort key following the process collation locale.

    Under the C/POSIX locale ``strxfrm`` is plain code-point order, which puts
    "Åland Islands" after "Zimbabwe", so accents are folded away instead.
    """
    if locale.getlocale(locale.LC_COLLATE)[0] is None:
        return _plain_key(name)
    return locale.strxfrm(name), name


def load_countries(url: str | None = None) -> list[str]:
    """Fetch every country's common name from REST Countries, sorted for display.

    Failures are logged and an empty list is returned; the selector simply
    stays empty.
    """
    url = url or countries_url()
    try:
        response = requests.get(url, params={"fields": "name"})
        response.raise_for_status()
        data = response.json()
        names = {item["name"]["common"] for item in data}
    except (requests.RequestException, ValueError, KeyError, TypeError) as e:
        logger.error(f"Error fetching countries: {e}")
        return []
    return sorted(names, key=collation_key)
