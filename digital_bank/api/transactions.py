"""
Deposit, withdrawal and transfer endpoints
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from .dependencies import get_ledger, to_http_error
from .schemas import AmountRequest, TransferRequest, result_response
from ..exceptions import LedgerError
from ..ledger import AccountLedger, LedgerResult


router = APIRouter()


def _respond(result: LedgerResult):
    body = result_response(result)
    if result.declined:
        return JSONResponse(status_code=422, content=body)
    return body


@router.post("/customers/{customer_id}/deposit")
async def deposit(
    customer_id: int,
    request: AmountRequest,
    ledger: AccountLedger = Depends(get_ledger)
):
    """Make a deposit"""
    try:
        result = ledger.deposit(customer_id, request.amount)
    except LedgerError as e:
        raise to_http_error(e)

    return _respond(result)


@router.post("/customers/{customer_id}/withdraw")
async def withdraw(
    customer_id: int,
    request: AmountRequest,
    ledger: AccountLedger = Depends(get_ledger)
):
    """Make a withdrawal"""
    try:
        result = ledger.withdraw(customer_id, request.amount)
    except LedgerError as e:
        raise to_http_error(e)

    return _respond(result)


@router.post("/transfers")
async def transfer(
    request: TransferRequest,
    ledger: AccountLedger = Depends(get_ledger)
):
    """Make a transfer between customers"""
    try:
        result = ledger.transfer(request.source_id, request.destination_id, request.amount)
    except LedgerError as e:
        raise to_http_error(e)

    return _respond(result)
