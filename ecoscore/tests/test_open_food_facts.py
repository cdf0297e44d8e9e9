"""Tests de l'intégration Open Food Facts"""

import asyncio
import json

import httpx
import pytest

from ecoscore.services.open_food_facts import (
    DEFAULT_ECO_SCORE,
    OpenFoodFactsClient,
    calculate_carbon_impact,
    calculate_environmental_footprint,
    calculate_packaging_sustainability,
)
from ecoscore.utils.exceptions import SourceUnavailableError


def make_client(handler):
    transport = httpx.MockTransport(handler)
    return OpenFoodFactsClient(
        httpx.AsyncClient(transport=transport),
        base_url="https://off.test",
        user_agent="EcoScoreFinder/1.0",
    )


def run(coro):
    return asyncio.run(coro)


NUTELLA = {
    "code": "3017620422003",
    "product_name": "Nutella",
    "brands": "Ferrero",
    "categories": "Spreads,Sweet spreads",
    "image_url": "https://images.off.test/nutella.jpg",
    "price": "4.99",
    "countries": "France",
    "ecoscore_score": 23,
    "ecoscore_grade": "d",
}


def test_fetch_by_barcode_normalizes_product():
    seen = {}

    def handler(request):
        seen["url"] = str(request.url)
        seen["user_agent"] = request.headers.get("user-agent")
        return httpx.Response(200, json={"status": 1, "product": NUTELLA})

    record = run(make_client(handler).fetch_by_barcode("3017620422003"))

    assert seen["url"] == "https://off.test/api/v0/product/3017620422003.json"
    assert seen["user_agent"] == "EcoScoreFinder/1.0"
    assert record.barcode == "3017620422003"
    assert record.name == "Nutella"
    assert record.brand == "Ferrero"
    assert record.eco_score == 23
    assert record.eco_score_grade == "D"
    assert record.environmental_footprint == 28
    assert record.packaging_sustainability == 33
    assert record.carbon_impact == 77
    assert record.price == "4.99"
    assert record.country == "France"


def test_fetch_by_barcode_non_2xx_is_not_found():
    client = make_client(lambda request: httpx.Response(404, text="not found"))
    assert run(client.fetch_by_barcode("0000000000000")) is None


def test_fetch_by_barcode_without_product_is_not_found():
    client = make_client(
        lambda request: httpx.Response(
            200, json={"status": 0, "status_verbose": "product not found"}
        )
    )
    assert run(client.fetch_by_barcode("0000000000000")) is None


def test_fetch_by_barcode_transport_error_raises():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(SourceUnavailableError) as exc_info:
        run(make_client(handler).fetch_by_barcode("3017620422003"))

    assert exc_info.value.operation == "fetch"


def test_fetch_by_barcode_invalid_json_raises():
    client = make_client(lambda request: httpx.Response(200, text="<html>oops</html>"))

    with pytest.raises(SourceUnavailableError):
        run(client.fetch_by_barcode("3017620422003"))


def test_missing_eco_score_uses_defaults():
    product = {"code": "123", "product_name": "Mystery"}
    client = make_client(lambda request: httpx.Response(200, json={"product": product}))

    record = run(client.fetch_by_barcode("123"))

    assert record.eco_score == DEFAULT_ECO_SCORE
    assert record.eco_score_grade == "C"
    assert record.environmental_footprint == 60
    assert record.packaging_sustainability == 60
    assert record.carbon_impact == 50


def test_missing_name_falls_back_to_unknown_product():
    client = make_client(
        lambda request: httpx.Response(200, json={"product": {"code": "123"}})
    )
    assert run(client.fetch_by_barcode("123")).name == "Unknown Product"


def test_long_fields_are_truncated_to_budget():
    product = {
        "code": "123",
        "product_name": "n" * 300,
        "brands": "b" * 300,
        "categories": "c" * 300,
        "image_url": "u" * 600,
        "countries": "k" * 150,
        "ecoscore_grade": "not-applicable",
    }
    client = make_client(lambda request: httpx.Response(200, json={"product": product}))

    record = run(client.fetch_by_barcode("123"))

    assert len(record.name) == 255
    assert len(record.brand) == 255
    assert len(record.category) == 255
    assert len(record.image_url) == 500
    assert len(record.country) == 100
    assert record.eco_score_grade == "NOT-APPLIC"


def test_out_of_range_eco_score_is_clamped():
    product = {"code": "123", "product_name": "Bonus", "ecoscore_score": 112}
    client = make_client(lambda request: httpx.Response(200, json={"product": product}))

    record = run(client.fetch_by_barcode("123"))

    assert record.eco_score == 100
    assert record.environmental_footprint == 120


def test_search_filters_unusable_entries_and_respects_limit():
    seen = {}

    def handler(request):
        seen["params"] = dict(request.url.params)
        seen["user_agent"] = request.headers.get("user-agent")
        return httpx.Response(
            200,
            json={
                "count": 5,
                "products": [
                    {"code": "1", "product_name": "Oat Milk", "ecoscore_score": 70},
                    {"code": "2", "product_name": "   "},
                    {"product_name": "No Code"},
                    {"code": "3", "product_name": "Soy Milk"},
                    {"code": "4", "product_name": "Rice Milk"},
                    "garbage",
                ],
            },
        )

    results = run(make_client(handler).search_by_text("milk", limit=2))

    assert [r.barcode for r in results] == ["1", "3"]
    assert seen["params"]["search_terms"] == "milk"
    assert seen["params"]["page_size"] == "2"
    assert seen["params"]["json"] == "1"
    assert seen["user_agent"] == "EcoScoreFinder/1.0"


def test_search_with_no_products_returns_empty_list():
    client = make_client(lambda request: httpx.Response(200, json={"products": []}))
    assert run(client.search_by_text("nothing")) == []


def test_search_server_error_raises():
    client = make_client(lambda request: httpx.Response(503, text="busy"))

    with pytest.raises(SourceUnavailableError) as exc_info:
        run(client.search_by_text("milk"))

    assert exc_info.value.operation == "search"


def test_submit_product_posts_form():
    seen = {}

    def handler(request):
        seen["method"] = request.method
        seen["body"] = request.content.decode()
        return httpx.Response(200, content=json.dumps({"status": 1}))

    status, payload = run(
        make_client(handler).submit_product({"code": "123", "product_name": "Tea"})
    )

    assert seen["method"] == "POST"
    assert "product_name=Tea" in seen["body"]
    assert status == 200
    assert payload == {"status": 1}


@pytest.mark.parametrize("eco_score", range(0, 101))
def test_derived_scores(eco_score):
    assert 0 <= calculate_packaging_sustainability(eco_score) <= 100
    assert calculate_carbon_impact(eco_score) == 100 - eco_score
    assert calculate_environmental_footprint(eco_score) == int(eco_score * 1.2 + 0.5)
