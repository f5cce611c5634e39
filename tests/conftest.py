import pytest
import requests


class FakeResponse:
    def __init__(self, status_code=200, payload=None, malformed=False):
        self.status_code = status_code
        self._payload = payload
        self._malformed = malformed

    def raise_for_status(self):
        if not 200 <= self.status_code < 300:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)

    def json(self):
        if self._malformed:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self._payload


class FakeGet:
    """Stand-in for ``requests.get`` that records every outbound call."""

    def __init__(self):
        self.response = FakeResponse(200, [])
        self.error = None
        self.calls = []

    def respond(self, status_code=200, payload=None, malformed=False):
        self.response = FakeResponse(status_code, payload, malformed)

    def fail(self, error):
        self.error = error

    def __call__(self, url, params=None, **kwargs):
        self.calls.append((url, params, kwargs))
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def fake_get(monkeypatch):
    fake = FakeGet()
    monkeypatch.setattr(requests, "get", fake)
    return fake
