import requests

from .config import server_address

SERVER_HOST, SERVER_PORT = server_address()

BASE_URL = f"http://{SERVER_HOST}:{SERVER_PORT}"


def find_universities(country: str) -> list:
    """Ask the server's lookup proxy for the universities of ``country``.

    Raises ``requests.RequestException`` on a non-2xx answer or a transport
    failure, and ``ValueError`` on a body that is not a JSON list.
    """
    response = requests.get(f"{BASE_URL}/api/universities", params={"country": country})
    response.raise_for_status()
    data = response.json()
    if not isinstance(data, list):
        raise ValueError(f"Expected a list of universities, got {type(data).__name__}")
    return data


def ping_server():
    try:
        response = requests.get(f"{BASE_URL}/ping", timeout=1.0)  # 1 second timeout
        response.raise_for_status()
        return True
    except requests.RequestException:
        return False
