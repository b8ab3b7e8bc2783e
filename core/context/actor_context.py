"""
ERP Context - ActorContext
==========================
Immutable identity of the user behind a request.
"""

from __future__ import annotations

from dataclasses import dataclass

ROLE_ADMIN = "admin"
ROLE_SALES_CAPTAIN = "sales_captain"
VALID_ROLES = frozenset({ROLE_ADMIN, ROLE_SALES_CAPTAIN})


@dataclass(frozen=True)
class ActorContext:
    """
    Canonical actor identity passed to every service call.

    user_id is the string form of the User primary key.
    """

    user_id: str
    role: str
    name: str = ""

    def __post_init__(self):
        if not self.user_id or not isinstance(self.user_id, str):
            raise ValueError("user_id must be a non-empty string.")

        if self.role not in VALID_ROLES:
            raise ValueError(f"role must be one of {sorted(VALID_ROLES)}.")

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN
