"""
ERP HTTP API - Handler Support
==============================
Every handler takes (params, dependencies, headers) and returns the
response envelope as a dict. Params are the merged path, query and body
values; handlers never see a framework request.

Order of checks: session → request contract → service call.
"""

from __future__ import annotations

import logging
from decimal import InvalidOperation
from typing import Any, Callable, Optional

from django.db import DataError

from core.context.actor_context import ActorContext
from core.errors import ErpError, ReasonCode, RejectionReason
from core.http_api.auth.middleware import resolve_request_context
from core.http_api.errors import (
    erp_error_response,
    error_response,
    rejection_response,
    success_response,
)

logger = logging.getLogger("erp.http")

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


# ══════════════════════════════════════════════════════════════
# PARAMS
# ══════════════════════════════════════════════════════════════

def optional_bool(params: dict[str, Any], key: str) -> Optional[bool]:
    value = params.get(key)
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise ValueError(f"{key} must be a boolean.")


def optional_text(params: dict[str, Any], key: str) -> Optional[str]:
    value = params.get(key)
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def object_list(params: dict[str, Any], key: str) -> list[dict[str, Any]]:
    value = params.get(key)
    if not isinstance(value, list):
        raise ValueError(f"{key} must be a list.")
    for entry in value:
        if not isinstance(entry, dict):
            raise ValueError(f"each entry in {key} must be an object.")
    return value


def changes_from(params: dict[str, Any], *, exclude: tuple[str, ...]) -> dict[str, Any]:
    return {key: value for key, value in params.items() if key not in exclude}


# ══════════════════════════════════════════════════════════════
# EXECUTION
# ══════════════════════════════════════════════════════════════

def run_handler(
    call: Callable[[], Any],
    *,
    operation: str,
    meta: Optional[dict[str, Any]] = None,
) -> dict[str, Any]:
    try:
        data = call()
    except ErpError as exc:
        logger.info(f"{operation} rejected: {exc.code} {exc.message}")
        return erp_error_response(exc)
    except ValueError as exc:
        logger.info(f"{operation} rejected: invalid request ({exc}).")
        return error_response(
            code=ReasonCode.VALIDATION_ERROR,
            message=str(exc),
        )
    except (InvalidOperation, DataError) as exc:
        # Derived totals that overflow their column.
        logger.info(f"{operation} rejected: value out of range ({exc!r}).")
        return error_response(
            code=ReasonCode.VALIDATION_ERROR,
            message="A numeric value is out of range.",
        )
    except Exception:
        logger.error(f"{operation} failed.", exc_info=True)
        return error_response(
            code=ReasonCode.INTERNAL_ERROR,
            message="An unexpected error occurred.",
        )
    return success_response(data, meta=meta)


def authenticated(
    dependencies,
    headers: dict[str, Any] | None,
    *,
    operation: str,
    call: Callable[[ActorContext], Any],
) -> dict[str, Any]:
    resolved = resolve_request_context(headers, dependencies.auth_provider)
    if isinstance(resolved, RejectionReason):
        logger.info(f"{operation} rejected: {resolved.code} {resolved.message}")
        return rejection_response(resolved)
    return run_handler(lambda: call(resolved), operation=operation)


def list_payload(items) -> dict[str, Any]:
    items = list(items)
    return {"items": items, "count": len(items)}
