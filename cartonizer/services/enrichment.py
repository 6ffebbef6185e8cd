from __future__ import annotations

import logging
from decimal import Decimal
from typing import Sequence

from cartonizer.core.settings import settings
from cartonizer.domain.errors import EnrichmentError
from cartonizer.domain.items import EnrichedItem, RequestedItem
from cartonizer.domain.measurements import Dimension, DimensionUnit, Weight, WeightUnit
from cartonizer.services.catalog_client import ProductCatalogClient, ProductInfo

logger = logging.getLogger(__name__)

DEFAULT_DIMENSIONS = Dimension(Decimal("5"), Decimal("5"), Decimal("5"), DimensionUnit.INCHES)
DEFAULT_WEIGHT = Weight(Decimal("1"), WeightUnit.POUNDS)
DEFAULT_CATEGORY = "UNKNOWN"


def default_item(item: RequestedItem) -> EnrichedItem:
    return EnrichedItem(
        sku=item.sku,
        quantity=item.quantity,
        dimensions=DEFAULT_DIMENSIONS,
        weight=DEFAULT_WEIGHT,
        category=DEFAULT_CATEGORY,
        fragile=False,
    )


class ProductDimensionEnricher:
    """Turns requested lines into fully dimensioned items, keeping their order."""

    def __init__(self, client: ProductCatalogClient, use_defaults: bool | None = None):
        self.client = client
        self.use_defaults = settings.ENRICHMENT_USE_DEFAULTS if use_defaults is None else use_defaults

    async def enrich_items(self, items: Sequence[RequestedItem]) -> list[EnrichedItem]:
        logger.debug("Enriching %d items with product dimensions", len(items))
        skus = list(dict.fromkeys(item.sku for item in items))
        known: dict[str, ProductInfo] = {p.sku: p for p in await self.client.get_products(skus)}

        enriched = []
        for item in items:
            product = known.get(item.sku)
            if product is None and self.client.enabled:
                # batch endpoints may skip entries; ask once more per sku
                product = await self.client.get_product(item.sku)
                if product is not None:
                    known[item.sku] = product
            enriched.append(self._resolve(item, product))

        logger.info("Successfully enriched %d items", len(enriched))
        return enriched

    def _resolve(self, item: RequestedItem, product: ProductInfo | None) -> EnrichedItem:
        if product is not None:
            return product.to_enriched_item(item.quantity)
        if not self.use_defaults:
            raise EnrichmentError(item.sku)
        logger.warning("Product info not found for SKU: %s, using default values", item.sku)
        return default_item(item)
