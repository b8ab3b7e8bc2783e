"""
ERP Identity - Service Layer
============================
User CRUD, password verification and admin seeding.
Passwords are stored through Django's configured PASSWORD_HASHERS.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from django.contrib.auth.hashers import check_password, make_password
from django.core.exceptions import ValidationError as DjangoValidationError
from django.core.validators import validate_email
from django.db import IntegrityError, transaction

from core.context.actor_context import ActorContext
from core.errors import Conflict, Forbidden, NotFound
from core.identity.models import User, UserRole
from core.permissions import PERMISSION_USERS_MANAGE, require_permission
from core.primitives import canonical_uuid, clean_string

logger = logging.getLogger("erp.identity")

MIN_PASSWORD_LENGTH = 6

_VALID_ROLES = frozenset({UserRole.ADMIN, UserRole.SALES_CAPTAIN})


def normalize_email(value: Any) -> str:
    email = clean_string(value, field_name="email").lower()
    try:
        validate_email(email)
    except DjangoValidationError as exc:
        raise ValueError("email must be a valid email address.") from exc
    return email


def _normalize_role(value: Any) -> str:
    role = clean_string(value, field_name="role").lower()
    if role not in _VALID_ROLES:
        raise ValueError("role must be one of admin, sales_captain.")
    return role


def _validate_password(value: Any) -> str:
    if not isinstance(value, str) or len(value) < MIN_PASSWORD_LENGTH:
        raise ValueError(
            f"password must be a string of at least {MIN_PASSWORD_LENGTH} characters."
        )
    return value


def serialize_user(user: User) -> dict[str, Any]:
    return {
        "id": str(user.id),
        "email": user.email,
        "name": user.name,
        "role": user.role,
        "is_active": user.is_active,
        "created_at": user.created_at.isoformat(),
    }


def actor_for_user(user: User) -> ActorContext:
    return ActorContext(user_id=str(user.id), role=user.role, name=user.name)


def get_user(user_id: Any) -> User:
    user = User.objects.filter(id=canonical_uuid(user_id, field_name="user_id")).first()
    if user is None:
        raise NotFound(f"User '{user_id}' not found.")
    return user


def authenticate(email: Any, password: Any) -> Optional[User]:
    """Return the active user matching the credentials, else None."""
    if not isinstance(email, str) or not isinstance(password, str):
        return None
    user = User.objects.filter(email=email.strip().lower()).first()
    if user is None or not user.is_active:
        return None
    if not check_password(password, user.password):
        return None
    return user


def list_users(*, actor: ActorContext) -> tuple[User, ...]:
    require_permission(actor, PERMISSION_USERS_MANAGE, policy_name="list_users")
    return tuple(User.objects.order_by("name", "id"))


def _create_user_row(*, email: str, password: str, name: str, role: str) -> User:
    try:
        with transaction.atomic():
            return User.objects.create(
                email=email,
                password=make_password(password),
                name=name,
                role=role,
            )
    except IntegrityError as exc:
        raise Conflict(f"A user with email '{email}' already exists.") from exc


def create_user(
    *,
    actor: ActorContext,
    email: Any,
    password: Any,
    name: Any,
    role: Any = UserRole.SALES_CAPTAIN,
) -> User:
    require_permission(actor, PERMISSION_USERS_MANAGE, policy_name="create_user")
    user = _create_user_row(
        email=normalize_email(email),
        password=_validate_password(password),
        name=clean_string(name, field_name="name"),
        role=_normalize_role(role),
    )
    logger.info(f"User {user.email} created with role {user.role} by {actor.user_id}.")
    return user


@transaction.atomic
def update_user(
    *,
    actor: ActorContext,
    user_id: Any,
    changes: dict[str, Any],
) -> User:
    require_permission(actor, PERMISSION_USERS_MANAGE, policy_name="update_user")
    user = get_user(user_id)

    update_fields = ["updated_at"]
    if "email" in changes:
        user.email = normalize_email(changes["email"])
        update_fields.append("email")
    if "name" in changes:
        user.name = clean_string(changes["name"], field_name="name")
        update_fields.append("name")
    if "role" in changes:
        user.role = _normalize_role(changes["role"])
        update_fields.append("role")
    if "password" in changes and changes["password"]:
        user.password = make_password(_validate_password(changes["password"]))
        update_fields.append("password")
    if "is_active" in changes:
        if not isinstance(changes["is_active"], bool):
            raise ValueError("is_active must be a boolean.")
        if not changes["is_active"] and str(user.id) == actor.user_id:
            raise Forbidden("You cannot deactivate your own account.")
        user.is_active = changes["is_active"]
        update_fields.append("is_active")

    try:
        with transaction.atomic():
            user.save(update_fields=update_fields)
    except IntegrityError as exc:
        raise Conflict(f"A user with email '{user.email}' already exists.") from exc
    logger.info(f"User {user.id} updated ({', '.join(update_fields[1:]) or 'no changes'}).")
    return user


def deactivate_user(*, actor: ActorContext, user_id: Any) -> User:
    """Users are never hard-deleted: orders and payments reference them."""
    require_permission(actor, PERMISSION_USERS_MANAGE, policy_name="deactivate_user")
    user = get_user(user_id)
    if str(user.id) == actor.user_id:
        raise Forbidden("You cannot delete your own account.")
    if user.is_active:
        user.is_active = False
        user.save(update_fields=["is_active", "updated_at"])
        logger.info(f"User {user.id} deactivated by {actor.user_id}.")
    return user


def ensure_admin(*, email: Any, password: Any, name: Any = "Admin") -> tuple[User, bool]:
    """
    Create the first admin when no user owns the email.

    Returns (user, created). An existing user is left untouched.
    """
    normalized_email = normalize_email(email)
    existing = User.objects.filter(email=normalized_email).first()
    if existing is not None:
        return existing, False
    user = _create_user_row(
        email=normalized_email,
        password=_validate_password(password),
        name=clean_string(name, field_name="name"),
        role=UserRole.ADMIN,
    )
    logger.info(f"Admin user {user.email} seeded.")
    return user, True
