from __future__ import annotations

import pytest

from core.errors import Forbidden, NotFound, ValidationError
from engines.production.commands import ProductionCreateRequest, ProductionUpdateRequest
from engines.production.models import ProductionStatus
from engines.production.services import (
    create_production,
    list_productions,
    serialize_production,
    update_production,
)

pytestmark = pytest.mark.django_db(transaction=True)


def test_admin_suggests_and_captain_progresses(admin, captain):
    production = create_production(
        ProductionCreateRequest(product_name="Garam Masala 100g", quantity="500"),
        actor=admin,
    )
    assert production.status == ProductionStatus.SUGGESTED
    assert production.quantity == 500

    production = update_production(
        ProductionUpdateRequest(production_id=production.id, status=ProductionStatus.IN_PROGRESS),
        actor=captain,
    )
    production = update_production(
        ProductionUpdateRequest(
            production_id=production.id,
            status=ProductionStatus.COMPLETED,
            notes="batch 42",
        ),
        actor=captain,
    )
    payload = serialize_production(production)
    assert payload["status"] == "completed"
    assert payload["notes"] == "batch 42"
    assert [row.id for row in list_productions(status="completed")] == [production.id]


def test_sales_captain_cannot_create(captain):
    with pytest.raises(Forbidden):
        create_production(
            ProductionCreateRequest(product_name="Chilli Powder", quantity=10),
            actor=captain,
        )


def test_update_unknown_production(admin):
    with pytest.raises(NotFound):
        update_production(
            ProductionUpdateRequest(
                production_id="8d3c2d0e-7c1f-4d0f-9a53-2f1b7a1c9e10",
                status=ProductionStatus.COMPLETED,
            ),
            actor=admin,
        )


def test_list_rejects_unknown_status(db):
    with pytest.raises(ValidationError):
        list_productions(status="shipped")


@pytest.mark.parametrize("quantity", [0, -3, "many", True])
def test_quantity_must_be_positive_integer(quantity):
    with pytest.raises(ValueError):
        ProductionCreateRequest(product_name="Chilli Powder", quantity=quantity)


def test_status_must_be_known():
    with pytest.raises(ValueError):
        ProductionUpdateRequest(
            production_id="8d3c2d0e-7c1f-4d0f-9a53-2f1b7a1c9e10",
            status="paused",
        )
