import logging
import uuid
from decimal import Decimal

import pytest

from cartonizer.domain.carton import Carton, CartonStatus
from cartonizer.domain.errors import CartonStateError
from cartonizer.domain.events import CartonCreated, CartonDeactivated, CartonUpdated
from cartonizer.domain.measurements import Dimension, Weight, WeightUnit


def _dims(l, w, h):
    return Dimension(Decimal(l), Decimal(w), Decimal(h))


def test_create_assigns_identity_and_records_event():
    carton = Carton.create("  Small Box ", _dims(8, 6, 4), Weight(Decimal(10)))

    assert uuid.UUID(carton.id)
    assert carton.name == "Small Box"
    assert carton.is_active
    events = carton.pull_events()
    assert len(events) == 1
    assert isinstance(events[0], CartonCreated)
    assert events[0].carton_id == carton.id
    assert carton.pull_events() == []


@pytest.mark.parametrize("name", ["", "   ", None])
def test_create_rejects_blank_name(name):
    with pytest.raises(CartonStateError, match="name cannot be empty"):
        Carton.create(name, _dims(1, 1, 1), Weight(Decimal(1)))


def test_create_rejects_missing_measurements():
    with pytest.raises(CartonStateError, match="Invalid carton dimensions"):
        Carton.create("Box", None, Weight(Decimal(1)))
    with pytest.raises(CartonStateError, match="Invalid carton weight capacity"):
        Carton.create("Box", _dims(1, 1, 1), None)


def test_can_fit_item_checks_weight_and_rotation():
    carton = Carton.create("Box", _dims(10, 5, 2), Weight(Decimal(10)))

    assert carton.can_fit_item(_dims(2, 10, 5), Weight(Decimal(10)))
    assert not carton.can_fit_item(_dims(11, 1, 1), Weight(Decimal(1)))
    # shape fits but it is too heavy
    assert not carton.can_fit_item(_dims(1, 1, 1), Weight(Decimal("10.01")))
    assert not carton.can_fit_item(_dims(1, 1, 1), Weight(Decimal(5), WeightUnit.KILOGRAMS))


def test_deactivate_is_idempotent():
    carton = Carton.create("Box", _dims(1, 1, 1), Weight(Decimal(1)))
    carton.pull_events()

    carton.deactivate()
    carton.deactivate()

    assert carton.status == CartonStatus.INACTIVE
    events = carton.pull_events()
    assert len(events) == 1
    assert isinstance(events[0], CartonDeactivated)


def test_activate_when_active_is_a_noop(caplog):
    carton = Carton.create("Box", _dims(1, 1, 1), Weight(Decimal(1)))
    carton.pull_events()
    stamp = carton.updated_at

    with caplog.at_level(logging.WARNING, logger="cartonizer.domain.carton"):
        carton.activate()

    assert carton.updated_at == stamp
    assert carton.pull_events() == []
    assert "already active" in caplog.text


def test_reactivate_after_deactivate():
    carton = Carton.create("Box", _dims(1, 1, 1), Weight(Decimal(1)))
    carton.deactivate()
    carton.activate()
    assert carton.is_active


def test_update_carton_keeps_identity():
    carton = Carton.create("Box", _dims(1, 1, 1), Weight(Decimal(1)))
    carton.pull_events()
    original_id, created = carton.id, carton.created_at

    carton.update_carton("Bigger Box", _dims(2, 2, 2), Weight(Decimal(3)))

    assert (carton.id, carton.created_at) == (original_id, created)
    assert carton.name == "Bigger Box"
    assert carton.dimensions.volume == Decimal("8.00")
    events = carton.pull_events()
    assert [type(e) for e in events] == [CartonUpdated]
    assert events[0].name == "Bigger Box"


def test_failed_update_changes_nothing():
    carton = Carton.create("Box", _dims(1, 1, 1), Weight(Decimal(1)))
    carton.pull_events()

    with pytest.raises(CartonStateError):
        carton.update_carton("", _dims(2, 2, 2), Weight(Decimal(3)))

    assert carton.name == "Box"
    assert carton.pending_events == ()


def test_single_field_updates_each_record_an_event():
    carton = Carton.create("Box", _dims(1, 1, 1), Weight(Decimal(1)))
    carton.pull_events()

    carton.update_name("Renamed")
    carton.update_dimensions(_dims(3, 3, 3))
    carton.update_max_weight(Weight(Decimal(7)))

    assert len(carton.pull_events()) == 3
    assert carton.max_weight.value == Decimal(7)


def test_restore_emits_nothing():
    original = Carton.create("Box", _dims(1, 1, 1), Weight(Decimal(1)))
    restored = Carton.restore(
        carton_id=original.id,
        name=original.name,
        dimensions=original.dimensions,
        max_weight=original.max_weight,
        status=CartonStatus.INACTIVE,
        created_at=original.created_at,
        updated_at=original.updated_at,
    )
    assert restored.id == original.id
    assert not restored.is_active
    assert restored.pull_events() == []


def test_event_payload_uses_camel_case():
    carton = Carton.create("Box", _dims(1, 2, 3), Weight(Decimal(4)))
    payload = carton.pull_events()[0].to_dict()
    assert payload["type"] == "carton.created"
    assert payload["cartonId"] == carton.id
    assert payload["dimensions"] == {"length": 1.0, "width": 2.0, "height": 3.0, "unit": "INCHES"}
    assert payload["maxWeight"] == {"value": 4.0, "unit": "POUNDS"}
