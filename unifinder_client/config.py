import os
from pathlib import Path

import tomli
import tomli_w

DEFAULT_SETTINGS_FILE = Path(__file__).parent.parent / "settings.toml"
SETTINGS_FILE = Path(os.getenv("UNIFINDER_SETTINGS", str(DEFAULT_SETTINGS_FILE)))

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8000
COUNTRIES_URL = "https://restcountries.com/v3.1/all"


def read_settings(path: Path = SETTINGS_FILE) -> dict:
    if not path.exists():
        return {}
    with open(path, "rb") as f:
        return tomli.load(f)


def server_address(path: Path = SETTINGS_FILE) -> tuple[str, int]:
    server = read_settings(path).get("server", {})
    return server.get("host", DEFAULT_HOST), int(server.get("port", DEFAULT_PORT))


def countries_url(path: Path = SETTINGS_FILE) -> str:
    return read_settings(path).get("upstream", {}).get("countries_url", COUNTRIES_URL)


def save_server_settings(host: str, port: int, path: Path = SETTINGS_FILE):
    """Rewrite the [server] table, keeping every other table as it was."""
    settings = read_settings(path)
    settings["server"] = {"host": host, "port": port}
    with open(path, "wb") as f:
        tomli_w.dump(settings, f)
