import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import tomli

DEFAULT_SETTINGS_FILE = Path(__file__).parent.parent / "settings.toml"
SETTINGS_FILE = Path(os.getenv("UNIFINDER_SETTINGS", str(DEFAULT_SETTINGS_FILE)))

UNIVERSITIES_URL = "http://universities.hipolabs.com/search"
RANKINGS_URL = "https://www.4icu.org/api/universities"


@dataclass(frozen=True)
class ServerSettings:
    host: str = "127.0.0.1"
    port: int = 8000
    universities_url: str = UNIVERSITIES_URL
    rankings_url: str = RANKINGS_URL
    timeout: Optional[float] = None  # None keeps the requests default (no timeout)


def load_settings(path: Path = SETTINGS_FILE) -> ServerSettings:
    """Read the [server] and [upstream] tables, falling back to defaults."""
    if not path.exists():
        return ServerSettings()

    with open(path, "rb") as f:
        settings = tomli.load(f)

    server = settings.get("server", {})
    upstream = settings.get("upstream", {})
    defaults = ServerSettings()
    return ServerSettings(
        host=server.get("host", defaults.host),
        port=int(server.get("port", defaults.port)),
        universities_url=upstream.get("universities_url", defaults.universities_url),
        rankings_url=upstream.get("rankings_url", defaults.rankings_url),
        timeout=upstream.get("timeout", defaults.timeout),
    )
