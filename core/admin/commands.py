"""
ERP Admin - Request Contracts
=============================
"""

from __future__ import annotations

from dataclasses import dataclass

RESET_CONFIRMATION = "RESET"


@dataclass(frozen=True)
class MasterResetRequest:
    confirmation: str

    def __post_init__(self):
        if self.confirmation != RESET_CONFIRMATION:
            raise ValueError("Invalid confirmation code.")
