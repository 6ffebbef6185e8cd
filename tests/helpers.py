from decimal import Decimal

from cartonizer.domain.carton import Carton
from cartonizer.domain.items import EnrichedItem
from cartonizer.domain.measurements import Dimension, Weight


def make_item(sku, length, width, height, weight, quantity=1, category="GENERAL", fragile=False,
              dimension_unit="INCHES", weight_unit="POUNDS"):
    return EnrichedItem(
        sku=sku,
        quantity=quantity,
        dimensions=Dimension(Decimal(str(length)), Decimal(str(width)), Decimal(str(height)), dimension_unit),
        weight=Weight(Decimal(str(weight)), weight_unit),
        category=category,
        fragile=fragile,
    )


def make_carton(name, length, width, height, max_weight, dimension_unit="INCHES", weight_unit="POUNDS"):
    carton = Carton.create(
        name,
        Dimension(Decimal(str(length)), Decimal(str(width)), Decimal(str(height)), dimension_unit),
        Weight(Decimal(str(max_weight)), weight_unit),
    )
    carton.pull_events()
    return carton


def starter_cartons():
    return [
        make_carton("Large Box", 18, 14, 12, 40),
        make_carton("Small Box", 8, 6, 4, 10),
        make_carton("Medium Box", 12, 10, 8, 25),
    ]
