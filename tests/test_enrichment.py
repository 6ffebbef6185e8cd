from decimal import Decimal

import httpx
import pytest

from cartonizer.domain.errors import CatalogUnavailableError, EnrichmentError
from cartonizer.domain.items import RequestedItem
from cartonizer.domain.measurements import DimensionUnit, WeightUnit
from cartonizer.services.catalog_client import ProductCatalogClient
from cartonizer.services.enrichment import DEFAULT_DIMENSIONS, ProductDimensionEnricher

pytestmark = pytest.mark.anyio

BASE_URL = "http://catalog.test"

PRODUCTS = {
    "MUG-1": {
        "sku": "MUG-1",
        "name": "Coffee mug",
        "dimensions": {"length": 4, "width": 4, "height": 5, "unit": "in"},
        "weight": {"value": 0.8, "unit": "lb"},
        "category": "KITCHEN",
        "fragile": True,
    },
    "BOOK-1": {
        "sku": "BOOK-1",
        "name": "Paperback",
        "dimensions": {"length": 20, "width": 13, "height": 3, "unit": "CENTIMETERS"},
        "weight": {"value": 0.4, "unit": "KILOGRAMS"},
        "category": "BOOKS",
        "barcode": "9780000000001",
    },
}


def catalog_handler(batch=True):
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request.url.path)
        if request.url.path == "/api/v1/products/batch":
            if not batch:
                return httpx.Response(200, json=[])
            skus = request.url.params["skus"].split(",")
            return httpx.Response(200, json=[PRODUCTS[s] for s in skus if s in PRODUCTS])
        sku = request.url.path.rsplit("/", 1)[-1]
        if sku in PRODUCTS:
            return httpx.Response(200, json=PRODUCTS[sku])
        return httpx.Response(404, json={"detail": "not found"})

    return handler, calls


def make_client(handler):
    return ProductCatalogClient(base_url=BASE_URL, timeout=1.0, transport=httpx.MockTransport(handler))


async def test_get_product_parses_units_case_insensitively():
    handler, _ = catalog_handler()
    product = await make_client(handler).get_product("MUG-1")

    assert product.name == "Coffee mug"
    assert product.dimensions.unit == DimensionUnit.INCHES
    assert product.weight.unit == WeightUnit.POUNDS
    assert product.weight.value == Decimal("0.8")
    assert product.fragile is True


async def test_get_product_missing_returns_none():
    handler, _ = catalog_handler()
    assert await make_client(handler).get_product("NOPE") is None


async def test_get_product_server_error():
    client = make_client(lambda request: httpx.Response(503))
    with pytest.raises(CatalogUnavailableError, match="503"):
        await client.get_product("MUG-1")


async def test_get_product_transport_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(CatalogUnavailableError):
        await make_client(handler).get_product("MUG-1")


async def test_malformed_entry_is_reported():
    client = make_client(lambda request: httpx.Response(200, json={"sku": "BAD", "dimensions": {}}))
    with pytest.raises(CatalogUnavailableError, match="Malformed"):
        await client.get_product("BAD")


async def test_non_numeric_side_is_reported_as_malformed():
    entry = {
        "sku": "BAD",
        "dimensions": {"length": "abc", "width": 1, "height": 1, "unit": "INCHES"},
        "weight": {"value": 1, "unit": "POUNDS"},
    }
    client = make_client(lambda request: httpx.Response(200, json=entry))
    with pytest.raises(CatalogUnavailableError, match="Malformed"):
        await client.get_product("BAD")


async def test_get_products_batch():
    handler, calls = catalog_handler()
    products = await make_client(handler).get_products(["MUG-1", "BOOK-1", "NOPE"])

    assert sorted(p.sku for p in products) == ["BOOK-1", "MUG-1"]
    assert calls == ["/api/v1/products/batch"]


async def test_disabled_client_never_calls_out():
    handler, calls = catalog_handler()
    client = ProductCatalogClient(base_url="", transport=httpx.MockTransport(handler))

    assert not client.enabled
    assert await client.get_product("MUG-1") is None
    assert await client.get_products(["MUG-1"]) == []
    assert calls == []


async def test_enricher_keeps_order_and_uses_defaults():
    handler, _ = catalog_handler()
    enricher = ProductDimensionEnricher(make_client(handler), use_defaults=True)

    items = await enricher.enrich_items([
        RequestedItem("BOOK-1", 2),
        RequestedItem("UNKNOWN-SKU", 1),
        RequestedItem("MUG-1", 3),
    ])

    assert [(it.sku, it.quantity) for it in items] == [("BOOK-1", 2), ("UNKNOWN-SKU", 1), ("MUG-1", 3)]
    assert items[0].category == "BOOKS"
    assert items[0].dimensions.unit == DimensionUnit.CENTIMETERS
    assert items[1].dimensions == DEFAULT_DIMENSIONS
    assert items[1].weight.value == Decimal(1)
    assert items[1].category == "UNKNOWN"
    assert items[2].is_fragile


async def test_enricher_raises_without_defaults():
    handler, _ = catalog_handler()
    enricher = ProductDimensionEnricher(make_client(handler), use_defaults=False)

    with pytest.raises(EnrichmentError) as exc_info:
        await enricher.enrich_items([RequestedItem("MUG-1", 1), RequestedItem("UNKNOWN-SKU", 1)])
    assert exc_info.value.sku == "UNKNOWN-SKU"


async def test_enricher_falls_back_to_single_lookup():
    handler, calls = catalog_handler(batch=False)
    enricher = ProductDimensionEnricher(make_client(handler), use_defaults=False)

    items = await enricher.enrich_items([RequestedItem("MUG-1", 1), RequestedItem("MUG-1", 2)])

    assert [it.quantity for it in items] == [1, 2]
    # the second line reuses the first lookup
    assert calls == ["/api/v1/products/batch", "/api/v1/products/MUG-1"]


async def test_enricher_without_catalog_uses_defaults():
    enricher = ProductDimensionEnricher(ProductCatalogClient(base_url=""), use_defaults=True)
    items = await enricher.enrich_items([RequestedItem("ANY", 4)])
    assert items[0].dimensions == DEFAULT_DIMENSIONS
    assert items[0].quantity == 4
