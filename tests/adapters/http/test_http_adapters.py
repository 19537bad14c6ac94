from __future__ import annotations

import json
from collections.abc import Callable

import httpx
import pytest

from adapters.http.framework_repository import HttpFrameworkRepository
from adapters.http.logo_loader import HttpLogoLoader
from domain.ports.repositories import DatasetLoadError
from tests.helpers.dataset_fixtures import SAMPLE_RECORDS


def _client(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler))


def test_loads_json_over_http() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/agent_frameworks.json"
        return httpx.Response(200, content=json.dumps(SAMPLE_RECORDS).encode("utf-8"))

    repository = HttpFrameworkRepository(client=_client(handler))
    frameworks = repository.load("https://data.example.com/agent_frameworks.json")

    assert [f.name for f in frameworks] == ["Alpha", "Beta", "Gamma", "Delta"]


def test_detects_csv_from_content_type() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            content=b"name,category,code_level\nCSV Agent,Agent Framework,0.6\n",
            headers={"content-type": "text/csv; charset=utf-8"},
        )

    frameworks = HttpFrameworkRepository(client=_client(handler)).load(
        "https://data.example.com/export"
    )

    assert [f.name for f in frameworks] == ["CSV Agent"]


def test_http_error_raises_load_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, text="boom")

    repository = HttpFrameworkRepository(client=_client(handler))

    with pytest.raises(DatasetLoadError) as exc_info:
        repository.load("https://data.example.com/agent_frameworks.json")
    assert exc_info.value.source == "https://data.example.com/agent_frameworks.json"


def test_transport_error_raises_load_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("unreachable", request=request)

    with pytest.raises(DatasetLoadError):
        HttpFrameworkRepository(client=_client(handler)).load("https://down.example.com/x.json")


def test_logo_loader_returns_image() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200, content=b"<svg/>", headers={"content-type": "image/svg+xml; charset=utf-8"}
        )

    image = HttpLogoLoader(client=_client(handler))("https://logos.example.com/a.svg")

    assert image is not None
    assert image.content == b"<svg/>"
    assert image.media_type == "image/svg+xml"


def test_logo_loader_reports_miss_on_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404)

    assert HttpLogoLoader(client=_client(handler))("https://logos.example.com/x.png") is None


def test_close_releases_owned_clients() -> None:
    repository = HttpFrameworkRepository(timeout=1.0)
    loader = HttpLogoLoader(timeout=1.0)

    repository.close()
    loader.close()

    assert repository.closed
    assert loader.closed


def test_close_leaves_injected_client_open() -> None:
    client = _client(lambda request: httpx.Response(200))

    HttpFrameworkRepository(client=client).close()
    HttpLogoLoader(client=client).close()

    assert not client.is_closed
    client.close()
