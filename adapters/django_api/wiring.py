"""
ERP Django Adapter Wiring
=========================
Constructs HttpApiDependencies for the running server: DB-backed
sessions, the wall clock and DB-backed document numbering.
"""

from __future__ import annotations

import threading

from core.auth.provider import DbAuthProvider
from core.documents.numbering import DbNumberingProvider
from core.http_api.dependencies import HttpApiDependencies
from core.time.clock import SystemClock

_DEPENDENCIES_LOCK = threading.Lock()
_DEPENDENCIES: HttpApiDependencies | None = None


def _create_dependencies() -> HttpApiDependencies:
    clock = SystemClock()
    return HttpApiDependencies(
        auth_provider=DbAuthProvider(clock=clock),
        clock=clock,
        numbering=DbNumberingProvider(),
    )


def build_dependencies() -> HttpApiDependencies:
    """
    Lazy singleton wiring for adapter runtime.
    """
    global _DEPENDENCIES
    with _DEPENDENCIES_LOCK:
        if _DEPENDENCIES is None:
            _DEPENDENCIES = _create_dependencies()
        return _DEPENDENCIES


def reset_dependencies() -> None:
    """Drop the cached bundle; tests call this after swapping settings."""
    global _DEPENDENCIES
    with _DEPENDENCIES_LOCK:
        _DEPENDENCIES = None
