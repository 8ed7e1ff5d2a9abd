"""
Transaction Records Module

Immutable records of balance mutations and the ledger-wide append-only log
that holds them. Records are created only by AccountLedger as the side
effect of a successful deposit, withdrawal or transfer.
"""

from decimal import Decimal
from datetime import datetime
from dataclasses import dataclass
from typing import Any, Dict, List, Optional
from enum import Enum


class TransactionType(Enum):
    """Kinds of balance mutation"""
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    TRANSFER_OUT = "transfer_out"   # Debit side of a transfer
    TRANSFER_IN = "transfer_in"     # Credit side of a transfer


@dataclass(frozen=True)
class Transaction:
    """
    A single balance mutation on one customer's account
    """
    id: int
    kind: TransactionType
    amount: Decimal
    timestamp: datetime
    customer_id: int
    description: str
    counterparty_id: Optional[int] = None  # Other side of a transfer

    def __post_init__(self):
        if self.amount <= Decimal('0'):
            raise ValueError("Transaction amount must be positive")

        is_transfer = self.kind in (TransactionType.TRANSFER_OUT, TransactionType.TRANSFER_IN)
        if is_transfer and self.counterparty_id is None:
            raise ValueError("Transfer records must reference a counterparty")
        if not is_transfer and self.counterparty_id is not None:
            raise ValueError("Only transfer records carry a counterparty")

    @property
    def is_credit(self) -> bool:
        """True when the record increased the balance"""
        return self.kind in (TransactionType.DEPOSIT, TransactionType.TRANSFER_IN)

    @property
    def signed_amount(self) -> Decimal:
        """Amount with the sign of its effect on the balance"""
        return self.amount if self.is_credit else -self.amount

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-friendly dictionary"""
        return {
            "id": self.id,
            "kind": self.kind.value,
            "amount": str(self.amount),
            "timestamp": self.timestamp.isoformat(),
            "customer_id": self.customer_id,
            "counterparty_id": self.counterparty_id,
            "description": self.description,
        }


class TransactionLog:
    """
    Append-only, ledger-wide sequence of transactions in id order

    Not thread-safe on its own; AccountLedger serializes access.
    """

    def __init__(self):
        self._entries: List[Transaction] = []

    def append(self, transaction: Transaction) -> None:
        if self._entries and transaction.id <= self._entries[-1].id:
            raise ValueError(
                f"Transaction id {transaction.id} is not greater than "
                f"the last logged id {self._entries[-1].id}"
            )
        self._entries.append(transaction)

    def all(self) -> List[Transaction]:
        """Copy of every logged transaction"""
        return list(self._entries)

    def for_customer(self, customer_id: int) -> List[Transaction]:
        return [t for t in self._entries if t.customer_id == customer_id]

    def __len__(self) -> int:
        return len(self._entries)
