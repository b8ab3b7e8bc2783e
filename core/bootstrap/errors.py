"""
ERP Bootstrap — System Errors
=============================
"""


class SystemBootstrapError(Exception):
    """
    Raised when a startup check fails. The process must not serve
    requests after this; there is no warning-only mode.
    """

    def __init__(self, invariant: str, detail: str):
        self.invariant = invariant
        self.detail = detail
        super().__init__(
            f"ERP BOOTSTRAP FAILURE — {invariant}: {detail}"
        )
