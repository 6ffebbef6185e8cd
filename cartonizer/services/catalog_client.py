from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

import httpx

from cartonizer.core.settings import settings
from cartonizer.domain.errors import CatalogUnavailableError
from cartonizer.domain.items import EnrichedItem
from cartonizer.domain.measurements import Dimension, Weight

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProductInfo:
    sku: str
    name: str
    dimensions: Dimension
    weight: Weight
    category: str
    fragile: bool = False
    active: bool = True
    description: str | None = None
    barcode: str | None = None

    def to_enriched_item(self, quantity: int) -> EnrichedItem:
        return EnrichedItem(
            sku=self.sku,
            quantity=quantity,
            dimensions=self.dimensions,
            weight=self.weight,
            category=self.category,
            fragile=self.fragile,
        )


def parse_product(data: dict) -> ProductInfo:
    dims = data["dimensions"]
    weight = data["weight"]
    return ProductInfo(
        sku=data["sku"],
        name=data.get("name") or data["sku"],
        description=data.get("description"),
        dimensions=Dimension(dims["length"], dims["width"], dims["height"], dims["unit"]),
        weight=Weight(weight["value"], weight["unit"]),
        category=data.get("category") or "UNKNOWN",
        fragile=bool(data.get("fragile", False)),
        active=bool(data.get("active", True)),
        barcode=data.get("barcode"),
    )


class ProductCatalogClient:
    """Reads product master data from the catalog service over HTTP."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = (base_url if base_url is not None else settings.PRODUCT_CATALOG_BASE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.PRODUCT_CATALOG_TIMEOUT_SECONDS
        self._transport = transport

    @property
    def enabled(self) -> bool:
        return bool(self.base_url)

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout, transport=self._transport)

    async def get_product(self, sku: str) -> ProductInfo | None:
        if not self.enabled:
            return None
        try:
            async with self._client() as client:
                resp = await client.get(f"/api/v1/products/{sku}")
        except httpx.HTTPError as e:
            logger.error("Failed to fetch product info for SKU: %s (%s)", sku, e)
            raise CatalogUnavailableError(sku, f"Product catalog unavailable for SKU: {sku}") from e

        if resp.status_code == 404:
            logger.warning("Product not found for SKU: %s", sku)
            return None
        if resp.status_code != 200:
            raise CatalogUnavailableError(sku, f"Product catalog returned {resp.status_code} for SKU: {sku}")
        return self._parse(sku, resp.json())

    async def get_products(self, skus: Sequence[str]) -> list[ProductInfo]:
        if not self.enabled or not skus:
            return []
        try:
            async with self._client() as client:
                resp = await client.get("/api/v1/products/batch", params={"skus": ",".join(skus)})
        except httpx.HTTPError as e:
            logger.error("Failed to fetch products info for %d SKUs (%s)", len(skus), e)
            raise CatalogUnavailableError(skus[0], "Product catalog unavailable") from e

        if resp.status_code == 404:
            return []
        if resp.status_code != 200:
            raise CatalogUnavailableError(skus[0], f"Product catalog returned {resp.status_code}")
        return [self._parse(entry.get("sku", "?"), entry) for entry in resp.json()]

    def _parse(self, sku: str, data: dict) -> ProductInfo:
        try:
            return parse_product(data)
        except (KeyError, TypeError, ValueError, ArithmeticError) as e:
            raise CatalogUnavailableError(sku, f"Malformed catalog entry for SKU: {sku}") from e
