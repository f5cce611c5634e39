import pytest
import requests
from fastapi.testclient import TestClient

from unifinder_server.main import app, settings

HIPOLABS_SAMPLE = [
    {
        "name": "Kyoto University",
        "alpha_two_code": "JP",
        "country": "Japan",
        "state-province": None,
        "domains": ["kyoto-u.ac.jp"],
        "web_pages": ["http://www.kyoto-u.ac.jp/"],
    },
    {
        "name": "Osaka University",
        "alpha_two_code": "JP",
        "country": "Japan",
        "state-province": "Osaka",
        "domains": [],
        "web_pages": [],
    },
]


@pytest.fixture
def client():
    return TestClient(app)


def test_ping(client):
    response = client.get("/ping")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_universities_pass_through(client, fake_get):
    fake_get.respond(200, HIPOLABS_SAMPLE)

    response = client.get("/api/universities", params={"country": "Japan"})

    assert response.status_code == 200
    assert response.json() == HIPOLABS_SAMPLE


def test_universities_forwards_country_verbatim(client, fake_get):
    client.get("/api/universities", params={"country": "Côte d'Ivoire & co"})

    url, params, _ = fake_get.calls[0]
    assert url == settings.universities_url
    assert params == {"country": "Côte d'Ivoire & co"}


def test_universities_missing_country_forwards_empty_string(client, fake_get):
    client.get("/api/universities")
    assert fake_get.calls[0][1] == {"country": ""}


@pytest.mark.parametrize("status", [400, 404, 429, 502, 503])
def test_universities_upstream_status_is_relayed(client, fake_get, status):
    fake_get.respond(status, {"detail": "upstream secret"})

    response = client.get("/api/universities", params={"country": "Japan"})

    assert response.status_code == status
    assert response.json() == {"error": "Failed to fetch data"}


@pytest.mark.parametrize(
    "error",
    [
        requests.ConnectionError("connection refused"),
        requests.Timeout("read timed out"),
    ],
)
def test_universities_transport_failure(client, fake_get, error):
    fake_get.fail(error)

    response = client.get("/api/universities", params={"country": "Japan"})

    assert response.status_code == 500
    assert response.json() == {"error": "An error occurred"}


def test_universities_malformed_body(client, fake_get):
    fake_get.respond(200, malformed=True)

    response = client.get("/api/universities", params={"country": "Japan"})

    assert response.status_code == 500
    assert response.json() == {"error": "An error occurred"}


def test_rankings_forwards_both_parameters(client, fake_get):
    fake_get.respond(200, [{"rank": 1, "name": "Somewhere"}])

    response = client.get(
        "/api/rankings", params={"country": "Japan", "region": "Kansai"}
    )

    assert response.status_code == 200
    assert response.json() == [{"rank": 1, "name": "Somewhere"}]
    url, params, _ = fake_get.calls[0]
    assert url == settings.rankings_url
    assert params == {"country": "Japan", "region": "Kansai"}


def test_rankings_errors_match_lookup_contract(client, fake_get):
    fake_get.respond(404)
    response = client.get("/api/rankings", params={"country": "Japan"})
    assert response.status_code == 404
    assert response.json() == {"error": "Failed to fetch data"}

    fake_get.fail(requests.ConnectionError("down"))
    response = client.get("/api/rankings", params={"country": "Japan"})
    assert response.status_code == 500
    assert response.json() == {"error": "An error occurred"}


def test_universities_body_that_cannot_be_reencoded(client, fake_get):
    fake_get.respond(200, [{"name": "Kyoto University", "score": float("nan")}])

    response = client.get("/api/universities", params={"country": "Japan"})

    assert response.status_code == 500
    assert response.json() == {"error": "An error occurred"}
