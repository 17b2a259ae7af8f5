"""Tests for the OBS bridge and PokeAPI clients using fake sessions."""

from __future__ import annotations

import pytest
import requests

from poke_usage.clients import OBSClient, OBSClientError, PokeAPIClient, PokeAPIClientError


class FakeResponse:
    def __init__(self, status_code: int = 200, payload=None) -> None:
        self.status_code = status_code
        self._payload = payload

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        if self._payload is None:
            raise ValueError("no body")
        return self._payload


class FakeSession:
    def __init__(self, responses) -> None:
        self.responses = list(responses)
        self.requests: list[dict] = []

    def _next(self, method: str, url: str, **kwargs):
        self.requests.append({"method": method, "url": url, **kwargs})
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def get(self, url: str, **kwargs):
        return self._next("GET", url, **kwargs)

    def post(self, url: str, **kwargs):
        return self._next("POST", url, **kwargs)


def test_obs_set_browser_source_url_posts_input_settings() -> None:
    session = FakeSession([FakeResponse(payload={"requestStatus": {"result": True, "code": 100}})])
    client = OBSClient("http://127.0.0.1:4445/", auth_token="secret", session=session)

    client.set_browser_source_url("Usage", "http://x/frame?25=50.00&effect=none")

    request = session.requests[0]
    assert request["method"] == "POST"
    assert request["url"] == "http://127.0.0.1:4445/call/SetInputSettings"
    assert request["json"] == {
        "inputName": "Usage",
        "inputSettings": {"url": "http://x/frame?25=50.00&effect=none"},
    }
    assert request["headers"]["Authorization"] == "secret"


def test_obs_accepts_empty_body() -> None:
    client = OBSClient("http://bridge", session=FakeSession([FakeResponse()]))

    assert client.call("GetVersion") == {}


@pytest.mark.parametrize(
    "response",
    [
        requests.ConnectionError("refused"),
        FakeResponse(status_code=401),
        FakeResponse(payload={"result": False, "comment": "not connected"}),
        FakeResponse(payload={"requestResult": {"requestStatus": {"result": False, "code": 600}}}),
    ],
)
def test_obs_errors_raise_client_error(response) -> None:
    client = OBSClient("http://bridge", session=FakeSession([response]))

    with pytest.raises(OBSClientError):
        client.set_browser_source_url("Usage", "http://x/frame")


def test_pokeapi_species_entry_maps_id_and_legendary_flag() -> None:
    session = FakeSession([FakeResponse(payload={"id": 888, "is_legendary": True})])
    client = PokeAPIClient(session=session)

    entry = client.get_species_entry("Zacian-Crowned")

    assert entry is not None
    assert entry.name == "Zacian-Crowned"
    assert entry.dex_number == "888"
    assert entry.restricted is True
    assert session.requests[0]["url"] == "https://pokeapi.co/api/v2/pokemon-species/zacian"


def test_pokeapi_keeps_hyphenated_base_names() -> None:
    session = FakeSession(
        [
            FakeResponse(payload={"id": 250, "is_legendary": True}),
            FakeResponse(payload={"id": 1002, "is_legendary": True}),
        ]
    )
    client = PokeAPIClient(session=session)

    client.get_species("Ho-Oh")
    client.get_species("Chien-Pao")

    assert [req["url"].rsplit("/", 1)[1] for req in session.requests] == ["ho-oh", "chien-pao"]


def test_pokeapi_unknown_species_returns_none_and_is_cached() -> None:
    session = FakeSession([FakeResponse(status_code=404)])
    client = PokeAPIClient(session=session)

    assert client.get_species_entry("Fakemon") is None
    assert client.get_species_entry("Fakemon") is None
    assert len(session.requests) == 1


def test_pokeapi_server_error_raises() -> None:
    client = PokeAPIClient(session=FakeSession([FakeResponse(status_code=500)]))

    with pytest.raises(PokeAPIClientError):
        client.get_species("Pikachu")
