"""
ERP Production Engine — Service
===============================
Status moves freely between suggested, in_progress and completed.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from core.context.actor_context import ActorContext
from core.errors import NotFound, ValidationError
from core.permissions import (
    PERMISSION_PRODUCTION_MANAGE,
    PERMISSION_PRODUCTION_UPDATE,
    require_permission,
)
from engines.production.commands import ProductionCreateRequest, ProductionUpdateRequest
from engines.production.models import Production, ProductionStatus

logger = logging.getLogger("erp.production")


def serialize_production(production: Production) -> dict[str, Any]:
    return {
        "id": str(production.id),
        "product_name": production.product_name,
        "quantity": production.quantity,
        "status": production.status,
        "notes": production.notes,
        "created_at": production.created_at.isoformat(),
        "updated_at": production.updated_at.isoformat(),
    }


def list_productions(*, status: Optional[str] = None) -> tuple[Production, ...]:
    rows = Production.objects.all()
    if status is not None:
        if status not in ProductionStatus.values:
            raise ValidationError(f"Unknown production status '{status}'.")
        rows = rows.filter(status=status)
    return tuple(rows.order_by("-created_at", "id"))


def create_production(
    request: ProductionCreateRequest,
    *,
    actor: ActorContext,
) -> Production:
    require_permission(actor, PERMISSION_PRODUCTION_MANAGE, policy_name="create_production")
    production = Production.objects.create(
        product_name=request.product_name,
        quantity=request.quantity,
        notes=request.notes,
        created_by_id=actor.user_id,
    )
    logger.info(
        f"Production {production.id} suggested by {actor.user_id}: "
        f"{production.product_name} x{production.quantity}."
    )
    return production


def update_production(
    request: ProductionUpdateRequest,
    *,
    actor: ActorContext,
) -> Production:
    require_permission(actor, PERMISSION_PRODUCTION_UPDATE, policy_name="update_production")
    production = Production.objects.filter(id=request.production_id).first()
    if production is None:
        raise NotFound(f"Production '{request.production_id}' not found.")

    previous = production.status
    production.status = request.status
    fields = ["status", "updated_at"]
    if request.notes is not None:
        production.notes = request.notes
        fields.append("notes")
    production.save(update_fields=fields)
    logger.info(
        f"Production {production.id} moved {previous} → {production.status} "
        f"by {actor.user_id}."
    )
    return production
