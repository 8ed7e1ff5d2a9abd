"""
Pydantic schemas for API requests and response helpers
"""

from typing import Any, Dict, Optional
from pydantic import BaseModel, Field

from ..customers import Customer
from ..ledger import LedgerResult


class CreateCustomerRequest(BaseModel):
    name: str
    tax_id: str = Field(..., description="CPF, formatted or 11 bare digits")
    initial_balance: Optional[str] = Field(None, description="Decimal amount as string")
    credit_limit: Optional[str] = Field(None, description="Decimal amount as string")


class AmountRequest(BaseModel):
    amount: str = Field(..., description="Decimal amount as string")


class TransferRequest(BaseModel):
    source_id: int
    destination_id: int
    amount: str = Field(..., description="Decimal amount as string")


def customer_response(customer: Customer, include_history: bool = True) -> Dict[str, Any]:
    data = customer.to_dict()
    if not include_history:
        data.pop("history")
    return data


def result_response(result: LedgerResult) -> Dict[str, Any]:
    """Serialize a LedgerResult; balances keyed by customer id"""
    return {
        "success": result.success,
        "message": result.message,
        "decline_reason": result.decline_reason.value if result.decline_reason else None,
        "balances": {str(k): str(v) for k, v in result.balances.items()},
        "transactions": [t.to_dict() for t in result.transactions]
    }
