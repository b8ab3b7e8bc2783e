from __future__ import annotations

import uuid

import pytest

from core.context.actor_context import ROLE_ADMIN, ROLE_SALES_CAPTAIN, ActorContext
from core.errors import Forbidden, Unauthorized
from core.permissions import (
    PERMISSION_INVENTORY_MOVE,
    PERMISSION_INVOICES_MANAGE,
    PERMISSION_ORDERS_CREATE,
    PERMISSION_PAYMENTS_DELETE,
    PERMISSION_PAYMENTS_RECORD,
    PERMISSION_SYSTEM_RESET,
    has_permission,
    require_permission,
)
from core.permissions.constants import VALID_PERMISSIONS
from core.permissions.evaluator import PermissionEvaluator, permission_policy

ADMIN = ActorContext(user_id=str(uuid.uuid4()), role=ROLE_ADMIN)
CAPTAIN = ActorContext(user_id=str(uuid.uuid4()), role=ROLE_SALES_CAPTAIN)


def test_admin_holds_every_permission():
    assert all(has_permission(ADMIN, permission) for permission in VALID_PERMISSIONS)


@pytest.mark.parametrize(
    "permission",
    [PERMISSION_ORDERS_CREATE, PERMISSION_PAYMENTS_RECORD, PERMISSION_INVENTORY_MOVE],
)
def test_sales_captain_field_permissions(permission):
    assert has_permission(CAPTAIN, permission)


@pytest.mark.parametrize(
    "permission",
    [PERMISSION_INVOICES_MANAGE, PERMISSION_PAYMENTS_DELETE, PERMISSION_SYSTEM_RESET],
)
def test_sales_captain_lacks_admin_permissions(permission):
    assert not has_permission(CAPTAIN, permission)
    with pytest.raises(Forbidden):
        require_permission(CAPTAIN, permission)


def test_missing_actor_is_unauthorized():
    reason = permission_policy(None, PERMISSION_ORDERS_CREATE, policy_name="create_order")
    assert reason.code == "UNAUTHORIZED"
    assert reason.policy_name == "create_order"
    with pytest.raises(Unauthorized):
        require_permission(None, PERMISSION_ORDERS_CREATE)


def test_unknown_permission_is_a_programming_error():
    with pytest.raises(ValueError):
        PermissionEvaluator.evaluate(actor=ADMIN, permission="orders.teleport")


def test_actor_context_validates_role():
    with pytest.raises(ValueError):
        ActorContext(user_id="u1", role="owner")
    assert ADMIN.is_admin
    assert not CAPTAIN.is_admin
