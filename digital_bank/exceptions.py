"""
Ledger Error Taxonomy

Raised by AccountLedger operations before any state change happens.
Insufficient funds is not an error: it is reported as a declined LedgerResult.
"""

from typing import Sequence, Tuple


class LedgerError(ValueError):
    """Base class for all ledger failures"""
    pass


class InvalidArgumentError(LedgerError):
    """Malformed input: non-positive id or amount, bad CPF, missing field"""
    pass


class ConflictError(LedgerError):
    """Request collides with existing state, e.g. a duplicate CPF"""
    pass


class NotFoundError(LedgerError):
    """Referenced customer does not exist"""

    def __init__(self, missing_ids: Sequence[int]):
        self.missing_ids: Tuple[int, ...] = tuple(missing_ids)
        if len(self.missing_ids) == 1:
            message = f"Customer {self.missing_ids[0]} not found"
        else:
            joined = ", ".join(str(i) for i in self.missing_ids)
            message = f"Customers {joined} not found"
        super().__init__(message)
