"""
Customer registry endpoints
"""

from fastapi import APIRouter, HTTPException, Depends, status

from .dependencies import get_ledger, to_http_error
from .schemas import CreateCustomerRequest, customer_response
from ..exceptions import LedgerError
from ..ledger import AccountLedger


router = APIRouter()


@router.get("")
async def list_customers(ledger: AccountLedger = Depends(get_ledger)):
    """List all customers in creation order"""
    customers = ledger.list_customers()
    return {"customers": [customer_response(c, include_history=False) for c in customers]}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_customer(
    request: CreateCustomerRequest,
    ledger: AccountLedger = Depends(get_ledger)
):
    """Create a new customer"""
    kwargs = {"name": request.name, "tax_id": request.tax_id}
    if request.initial_balance is not None:
        kwargs["initial_balance"] = request.initial_balance
    if request.credit_limit is not None:
        kwargs["credit_limit"] = request.credit_limit

    try:
        customer = ledger.create_customer(**kwargs)
    except LedgerError as e:
        raise to_http_error(e)

    return customer_response(customer)


@router.get("/{customer_id}")
async def get_customer(
    customer_id: int,
    ledger: AccountLedger = Depends(get_ledger)
):
    """Get customer by ID"""
    try:
        customer = ledger.get_customer(customer_id)
    except LedgerError as e:
        raise to_http_error(e)

    if not customer:
        raise HTTPException(status_code=404, detail="Customer not found")

    return customer_response(customer)


@router.get("/{customer_id}/transactions")
async def get_customer_transactions(
    customer_id: int,
    ledger: AccountLedger = Depends(get_ledger)
):
    """Get a customer's transaction history"""
    try:
        history = ledger.get_history(customer_id)
    except LedgerError as e:
        raise to_http_error(e)

    return {"customer_id": customer_id, "transactions": [t.to_dict() for t in history]}
