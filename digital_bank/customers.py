"""
Customer Module

Customer profile with balance, overdraft limit and transaction history,
plus the field validation applied when a customer is registered.
"""

from decimal import Decimal
from datetime import datetime
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List

from .cpf import is_valid_cpf, normalize_cpf
from .currency import ZERO
from .exceptions import InvalidArgumentError
from .transactions import Transaction

MAX_NAME_LENGTH = 100
DEFAULT_CREDIT_LIMIT = Decimal('500.00')


@dataclass
class Customer:
    """
    Customer account holder

    Instances handed out by AccountLedger are snapshots; mutating them has no
    effect on the ledger.
    """
    id: int
    name: str
    tax_id: str  # CPF, 11 bare digits
    created_at: datetime
    balance: Decimal = ZERO
    credit_limit: Decimal = DEFAULT_CREDIT_LIMIT
    history: List[Transaction] = field(default_factory=list)

    @property
    def available_funds(self) -> Decimal:
        """Balance plus the unused part of the overdraft"""
        return self.balance + self.credit_limit

    def can_debit(self, amount: Decimal) -> bool:
        """Check the overdraft rule: balance may not drop below -credit_limit"""
        return amount <= self.available_funds

    def snapshot(self) -> 'Customer':
        """Copy detached from the ledger's own history list"""
        return replace(self, history=list(self.history))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-friendly dictionary"""
        return {
            "id": self.id,
            "name": self.name,
            "tax_id": self.tax_id,
            "balance": str(self.balance),
            "credit_limit": str(self.credit_limit),
            "created_at": self.created_at.isoformat(),
            "history": [t.to_dict() for t in self.history],
        }


def validate_name(name: Any, max_length: int = MAX_NAME_LENGTH) -> str:
    """Return the trimmed name or raise InvalidArgumentError"""
    if not isinstance(name, str) or not name.strip():
        raise InvalidArgumentError("Customer name is required")

    name = name.strip()
    if len(name) > max_length:
        raise InvalidArgumentError(
            f"Customer name must be at most {max_length} characters"
        )
    return name


def validate_tax_id(tax_id: Any) -> str:
    """Return the bare-digit CPF or raise InvalidArgumentError"""
    if not isinstance(tax_id, str) or not tax_id.strip():
        raise InvalidArgumentError("CPF is required")

    if not is_valid_cpf(tax_id):
        raise InvalidArgumentError(f"Invalid CPF: '{tax_id}'")

    return normalize_cpf(tax_id)
