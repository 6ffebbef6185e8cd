from decimal import Decimal

import pytest

from cartonizer.domain.errors import ValidationError
from cartonizer.domain.items import EnrichedItem
from cartonizer.domain.policy import PackingPolicy
from cartonizer.packing.validator import MAX_TOTAL_UNITS, BusinessRuleValidator

from helpers import make_item


@pytest.fixture
def validator():
    return BusinessRuleValidator()


def test_valid_request_passes(validator):
    validator.validate([make_item("A", 1, 1, 1, 1), make_item("B", 2, 2, 2, 2)], PackingPolicy.default())


@pytest.mark.parametrize("items", [[], None])
def test_empty_request_rejected(validator, items):
    with pytest.raises(ValidationError, match="at least one item"):
        validator.validate(items, PackingPolicy.default())


def test_missing_policy_rejected(validator):
    with pytest.raises(ValidationError, match="rules cannot be null"):
        validator.validate([make_item("A", 1, 1, 1, 1)], None)


@pytest.mark.parametrize("threshold", ["0", "-0.5", "1.01"])
def test_threshold_out_of_range(validator, threshold):
    policy = PackingPolicy(max_utilization_threshold=Decimal(threshold))
    with pytest.raises(ValidationError, match="between 0 and 1"):
        validator.validate([make_item("A", 1, 1, 1, 1)], policy)


def test_threshold_of_one_is_allowed(validator):
    validator.validate([make_item("A", 1, 1, 1, 1)], PackingPolicy(max_utilization_threshold=Decimal(1)))


def test_mixed_categories_rejected_when_disallowed(validator):
    items = [make_item("BOOK", 1, 1, 1, 1, category="BOOKS"), make_item("PAN", 1, 1, 1, 1, category="KITCHEN")]

    with pytest.raises(ValidationError, match="Mixed categories"):
        validator.validate(items, PackingPolicy(allow_mixed_categories=False))
    validator.validate(items, PackingPolicy(allow_mixed_categories=True))


def test_fragile_mix_rejected_when_separating(validator):
    items = [make_item("GLASS", 1, 1, 1, 1, fragile=True), make_item("BOLT", 1, 1, 1, 1)]

    with pytest.raises(ValidationError, match="Fragile and non-fragile"):
        validator.validate(items, PackingPolicy.default())
    validator.validate(items, PackingPolicy(separate_fragile_items=False))


def test_item_without_dimensions_rejected(validator):
    broken = EnrichedItem(sku="GHOST", quantity=1, dimensions=None, weight=None)
    with pytest.raises(ValidationError, match="GHOST"):
        validator.validate([broken], PackingPolicy.default())


def test_oversized_and_overweight_items_rejected(validator):
    with pytest.raises(ValidationError, match="maximum allowed size"):
        validator.validate([make_item("POLE", 1001, 1, 1, 1)], PackingPolicy.default())
    with pytest.raises(ValidationError, match="maximum allowed weight"):
        validator.validate([make_item("SAFE", 1, 1, 1, 1001)], PackingPolicy.default())


def test_too_many_units_rejected(validator):
    items = [make_item("A", 1, 1, 1, 1, quantity=MAX_TOTAL_UNITS), make_item("B", 1, 1, 1, 1)]
    with pytest.raises(ValidationError, match="Too many units"):
        validator.validate(items, PackingPolicy.default())


def test_is_item_valid(validator):
    assert validator.is_item_valid(make_item("A", 1, 1, 1, 1))
    assert not validator.is_item_valid(None)
    assert not validator.is_item_valid(EnrichedItem(sku=" ", quantity=1, dimensions=None, weight=None))
    assert not validator.is_item_valid(
        EnrichedItem(sku="A", quantity=0, dimensions=make_item("A", 1, 1, 1, 1).dimensions,
                     weight=make_item("A", 1, 1, 1, 1).weight)
    )


def test_can_pack_together(validator):
    book = make_item("BOOK", 1, 1, 1, 1, category="BOOKS")
    pan = make_item("PAN", 1, 1, 1, 1, category="KITCHEN")
    glass = make_item("GLASS", 1, 1, 1, 1, category="KITCHEN", fragile=True)

    assert validator.can_pack_together(book, pan, PackingPolicy.default())
    assert not validator.can_pack_together(book, pan, PackingPolicy(allow_mixed_categories=False))
    assert not validator.can_pack_together(pan, glass, PackingPolicy.default())
    assert validator.can_pack_together(pan, glass, PackingPolicy(separate_fragile_items=False))


def test_threshold_helpers(validator):
    threshold = Decimal("0.95")
    assert not validator.exceeds_weight_threshold(Decimal("9.5"), Decimal("10"), threshold)
    assert validator.exceeds_weight_threshold(Decimal("9.6"), Decimal("10"), threshold)
    assert validator.exceeds_weight_threshold(None, Decimal("10"), threshold)
    assert validator.exceeds_weight_threshold(Decimal("1"), Decimal("0"), threshold)

    # 182.4 / 192 is exactly 0.95
    assert not validator.exceeds_volume_threshold(Decimal("182.4"), Decimal("192"), threshold)
    assert validator.exceeds_volume_threshold(Decimal("182.5"), Decimal("192"), threshold)
    assert validator.exceeds_volume_threshold(Decimal("1"), None, threshold)
