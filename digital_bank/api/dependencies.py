"""
Shared dependencies for the API routers
"""

from decimal import Decimal

from fastapi import HTTPException, status

from ..config import get_config
from ..exceptions import ConflictError, LedgerError, NotFoundError
from ..ledger import AccountLedger


def create_ledger() -> AccountLedger:
    """Build a ledger from the current configuration"""
    config = get_config()
    return AccountLedger(
        default_credit_limit=Decimal(config.default_credit_limit),
        max_name_length=config.max_name_length
    )


# Process-wide ledger instance; state lives for the life of the service
ledger = create_ledger()


# Dependency to get the ledger
def get_ledger() -> AccountLedger:
    return ledger


def to_http_error(error: LedgerError) -> HTTPException:
    """Map a ledger error onto the matching HTTP status"""
    if isinstance(error, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(error))
    if isinstance(error, ConflictError):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(error))
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(error))
