import locale

import requests

from unifinder_client.countries import collation_key, load_countries

URL = "https://restcountries.example/v3.1/all"


def test_names_sorted_regardless_of_input_order(fake_get):
    fake_get.respond(
        200,
        [
            {"name": {"common": "Japan", "official": "Japan"}},
            {"name": {"common": "Brazil", "official": "Federative Republic of Brazil"}},
            {"name": {"common": "Canada", "official": "Canada"}},
            {"name": {"common": "Argentina", "official": "Argentine Republic"}},
        ],
    )

    assert load_countries(URL) == ["Argentina", "Brazil", "Canada", "Japan"]


def test_requests_only_the_name_field(fake_get):
    load_countries(URL)

    url, params, _ = fake_get.calls[0]
    assert url == URL
    assert params == {"fields": "name"}


def test_duplicate_names_collapse(fake_get):
    fake_get.respond(200, [{"name": {"common": "Chad"}}, {"name": {"common": "Chad"}}])
    assert load_countries(URL) == ["Chad"]


def test_transport_failure_is_swallowed(fake_get, caplog):
    fake_get.fail(requests.ConnectionError("no route to host"))

    assert load_countries(URL) == []
    assert "Error fetching countries" in caplog.text


def test_bad_status_is_swallowed(fake_get):
    fake_get.respond(400, {"status": 400, "message": "Bad Request"})
    assert load_countries(URL) == []


def test_unexpected_shape_is_swallowed(fake_get):
    fake_get.respond(200, [{"cca2": "JP"}])
    assert load_countries(URL) == []


def test_accented_names_sort_with_their_base_letters(fake_get, monkeypatch):
    # C/POSIX collation: no locale name is reported
    monkeypatch.setattr(locale, "getlocale", lambda category=None: (None, None))
    fake_get.respond(
        200,
        [
            {"name": {"common": name}}
            for name in [
                "Zimbabwe",
                "Réunion",
                "Åland Islands",
                "Cuba",
                "Romania",
                "Côte d'Ivoire",
                "Austria",
            ]
        ],
    )

    assert load_countries(URL) == [
        "Åland Islands",
        "Austria",
        "Côte d'Ivoire",
        "Cuba",
        "Réunion",
        "Romania",
        "Zimbabwe",
    ]


def test_collation_key_is_case_insensitive(monkeypatch):
    monkeypatch.setattr(locale, "getlocale", lambda category=None: (None, None))
    assert sorted(["eSwatini", "Ecuador", "Egypt"], key=collation_key) == [
        "Ecuador",
        "Egypt",
        "eSwatini",
    ]
