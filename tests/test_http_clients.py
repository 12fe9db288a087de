"""Tests for HTTP-based adapters."""

import asyncio
import json

import httpx
import pytest

from carb_tracker.adapters.fdc_client import HttpxFdcClient


def _client(handler) -> HttpxFdcClient:  # type: ignore[no-untyped-def]
    transport = httpx.MockTransport(handler)
    async_client = httpx.AsyncClient(transport=transport)
    return HttpxFdcClient(
        api_key="key",
        base_url="https://api.test",
        http_client=async_client,
    )


def test_fdc_client_search_posts_foundation_query() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"foods": []})

    client = _client(handler)

    search = asyncio.run(client.search_foods("rice"))

    assert search == {"foods": []}
    request = seen[0]
    assert request.method == "POST"
    assert request.url.path == "/foods/search"
    assert request.headers["X-Api-Key"] == "key"
    assert json.loads(request.content.decode()) == {
        "query": "rice",
        "dataType": ["Foundation"],
    }


def test_fdc_client_get_food_requests_carbohydrate_nutrient() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"fdcId": 1, "foodNutrients": []})

    client = _client(handler)

    food = asyncio.run(client.get_food(1))

    assert food is not None
    assert food["fdcId"] == 1
    assert seen[0].method == "GET"
    assert seen[0].url.path == "/food/1"
    assert seen[0].url.params["nutrients"] == "1005"


def test_fdc_client_get_food_not_found_returns_none() -> None:
    client = _client(lambda request: httpx.Response(404, json={}))

    assert asyncio.run(client.get_food(999)) is None


def test_fdc_client_raises_on_server_error() -> None:
    client = _client(lambda request: httpx.Response(500, json={}))

    with pytest.raises(httpx.HTTPStatusError):
        asyncio.run(client.search_foods("rice"))


def test_fdc_client_close() -> None:
    client = _client(lambda request: httpx.Response(200, json={}))

    asyncio.run(client.close())

    assert client.http_client.is_closed
