"""
Account Ledger Module

The in-memory authority for customer balances and transaction history.
Owns the customer registry and the ledger-wide transaction log, assigns
identifiers, and applies deposits, withdrawals and transfers under a single
lock so that no caller can observe a half-applied mutation.
"""

from decimal import Decimal
from datetime import datetime, timezone
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple
from enum import Enum
import threading

from .currency import ZERO, to_amount, to_positive_amount, format_amount
from .customers import (
    Customer, DEFAULT_CREDIT_LIMIT, MAX_NAME_LENGTH,
    validate_name, validate_tax_id
)
from .exceptions import ConflictError, InvalidArgumentError, NotFoundError
from .transactions import Transaction, TransactionLog, TransactionType
from .logging_config import get_logger, log_action


class DeclineReason(Enum):
    """Expected business outcomes that stop a mutation without an error"""
    INSUFFICIENT_FUNDS = "insufficient_funds"


@dataclass(frozen=True)
class LedgerResult:
    """
    Outcome of a deposit, withdrawal or transfer

    balances maps every customer involved to its post-operation balance
    (unchanged balances when the operation was declined).
    """
    success: bool
    balances: Dict[int, Decimal]
    message: str
    transactions: Tuple[Transaction, ...] = ()
    decline_reason: Optional[DeclineReason] = None

    @property
    def declined(self) -> bool:
        return not self.success

    @property
    def balance(self) -> Decimal:
        """Balance of the single account involved"""
        if len(self.balances) != 1:
            raise ValueError("Result involves more than one account; use balances")
        return next(iter(self.balances.values()))


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _require_id(value: Any, field_name: str = "customer_id") -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgumentError(f"{field_name} must be an integer")
    if value <= 0:
        raise InvalidArgumentError(f"{field_name} must be greater than zero")
    return value


class AccountLedger:
    """
    Customer registry plus balance-mutation engine

    Every operation that reads and then mutates state runs under one
    re-entrant lock. Reads take the same lock and hand out snapshots.
    Identifiers are allocated only once an operation is known to succeed,
    so failed attempts never consume an id.
    """

    def __init__(
        self,
        default_credit_limit: Decimal = DEFAULT_CREDIT_LIMIT,
        max_name_length: int = MAX_NAME_LENGTH,
        clock: Optional[Callable[[], datetime]] = None
    ):
        self.default_credit_limit = to_amount(default_credit_limit, "default_credit_limit")
        if self.default_credit_limit < ZERO:
            raise InvalidArgumentError("default_credit_limit cannot be negative")
        self.max_name_length = max_name_length

        self._clock = clock or _utc_now
        self._lock = threading.RLock()
        self._customers: Dict[int, Customer] = {}
        self._ids_by_tax_id: Dict[str, int] = {}
        self._log = TransactionLog()
        self._next_customer_id = 1
        self._next_transaction_id = 1
        self.logger = get_logger("bank.ledger")

    # ------------------------------------------------------------------
    # Registry
    # ------------------------------------------------------------------

    def list_customers(self) -> List[Customer]:
        """All customers in creation order"""
        with self._lock:
            return [c.snapshot() for c in self._customers.values()]

    def get_customer(self, customer_id: int) -> Optional[Customer]:
        """Get customer by ID, or None if no such customer exists"""
        _require_id(customer_id)
        with self._lock:
            customer = self._customers.get(customer_id)
            return customer.snapshot() if customer else None

    def get_customer_by_tax_id(self, tax_id: str) -> Optional[Customer]:
        """Get customer by CPF (formatted or bare digits)"""
        tax_id = validate_tax_id(tax_id)
        with self._lock:
            customer_id = self._ids_by_tax_id.get(tax_id)
            if customer_id is None:
                return None
            return self._customers[customer_id].snapshot()

    def create_customer(
        self,
        name: str,
        tax_id: str,
        initial_balance: Any = ZERO,
        credit_limit: Any = None
    ) -> Customer:
        """
        Register a new customer

        Args:
            name: Customer name, 1 to max_name_length characters
            tax_id: CPF, formatted or bare digits
            initial_balance: Opening balance, may be negative within the limit
            credit_limit: Overdraft limit; the ledger default when None

        Returns:
            Snapshot of the created Customer

        Raises:
            InvalidArgumentError: If any field is malformed
            ConflictError: If the CPF is already registered
        """
        name = validate_name(name, self.max_name_length)
        tax_id = validate_tax_id(tax_id)

        if credit_limit is None:
            credit_limit = self.default_credit_limit
        else:
            credit_limit = to_amount(credit_limit, "credit_limit")
            if credit_limit < ZERO:
                raise InvalidArgumentError("credit_limit cannot be negative")

        initial_balance = to_amount(initial_balance, "initial_balance")
        if initial_balance < -credit_limit:
            raise InvalidArgumentError(
                f"initial_balance {initial_balance} exceeds the overdraft "
                f"limit of {credit_limit}"
            )

        with self._lock:
            if tax_id in self._ids_by_tax_id:
                log_action(
                    self.logger, "warning", "Duplicate CPF rejected",
                    action="create_customer", resource="customer",
                    extra={"existing_customer_id": self._ids_by_tax_id[tax_id]}
                )
                raise ConflictError(f"A customer with CPF {tax_id} already exists")

            customer = Customer(
                id=self._next_customer_id,
                name=name,
                tax_id=tax_id,
                created_at=self._clock(),
                balance=initial_balance,
                credit_limit=credit_limit
            )
            self._next_customer_id += 1
            self._customers[customer.id] = customer
            self._ids_by_tax_id[tax_id] = customer.id

            log_action(
                self.logger, "info", "Customer created",
                action="create_customer", resource=f"customer:{customer.id}",
                extra={
                    "customer_id": customer.id,
                    "balance": str(customer.balance),
                    "credit_limit": str(customer.credit_limit)
                }
            )
            return customer.snapshot()

    # ------------------------------------------------------------------
    # Balance mutations
    # ------------------------------------------------------------------

    def deposit(self, customer_id: int, amount: Any) -> LedgerResult:
        """
        Credit a customer's balance

        Raises:
            InvalidArgumentError: Non-positive id or amount
            NotFoundError: Customer does not exist
        """
        _require_id(customer_id)
        amount = to_positive_amount(amount)

        with self._lock:
            customer = self._get_or_raise(customer_id)

            transaction = self._new_transaction(
                TransactionType.DEPOSIT, customer.id, amount, "Deposit"
            )
            customer.balance += amount
            self._record(customer, transaction)

            log_action(
                self.logger, "info", f"Deposit of {format_amount(amount)}",
                action="deposit", resource=f"customer:{customer.id}",
                extra={"transaction_id": transaction.id, "balance": str(customer.balance)}
            )
            return LedgerResult(
                success=True,
                balances={customer.id: customer.balance},
                message="Deposit completed",
                transactions=(transaction,)
            )

    def withdraw(self, customer_id: int, amount: Any) -> LedgerResult:
        """
        Debit a customer's balance, within the overdraft limit

        A withdrawal that would take the balance below -credit_limit is
        declined: the result has success=False and the balance is unchanged.

        Raises:
            InvalidArgumentError: Non-positive id or amount
            NotFoundError: Customer does not exist
        """
        _require_id(customer_id)
        amount = to_positive_amount(amount)

        with self._lock:
            customer = self._get_or_raise(customer_id)

            if not customer.can_debit(amount):
                return self._decline_insufficient_funds("withdraw", customer, amount, {
                    customer.id: customer.balance
                })

            transaction = self._new_transaction(
                TransactionType.WITHDRAWAL, customer.id, amount, "Withdrawal"
            )
            customer.balance -= amount
            self._record(customer, transaction)

            log_action(
                self.logger, "info", f"Withdrawal of {format_amount(amount)}",
                action="withdraw", resource=f"customer:{customer.id}",
                extra={"transaction_id": transaction.id, "balance": str(customer.balance)}
            )
            return LedgerResult(
                success=True,
                balances={customer.id: customer.balance},
                message="Withdrawal completed",
                transactions=(transaction,)
            )

    def transfer(self, source_id: int, destination_id: int, amount: Any) -> LedgerResult:
        """
        Move funds from one customer to another

        Only the source is subject to the overdraft rule. On success the
        source gets a TRANSFER_OUT record and the destination a TRANSFER_IN
        record, each pointing at the other party.

        Raises:
            InvalidArgumentError: Non-positive or equal ids, non-positive amount
            NotFoundError: One or both customers do not exist (source first)
        """
        _require_id(source_id, "source_id")
        _require_id(destination_id, "destination_id")
        if source_id == destination_id:
            raise InvalidArgumentError("Cannot transfer to the same customer")
        amount = to_positive_amount(amount)

        with self._lock:
            missing = [i for i in (source_id, destination_id) if i not in self._customers]
            if missing:
                raise NotFoundError(missing)

            source = self._customers[source_id]
            destination = self._customers[destination_id]

            if not source.can_debit(amount):
                return self._decline_insufficient_funds("transfer", source, amount, {
                    source.id: source.balance,
                    destination.id: destination.balance
                })

            debit = self._new_transaction(
                TransactionType.TRANSFER_OUT, source.id, amount,
                f"Transfer to {destination.name}", counterparty_id=destination.id
            )
            credit = self._new_transaction(
                TransactionType.TRANSFER_IN, destination.id, amount,
                f"Transfer from {source.name}", counterparty_id=source.id
            )
            source.balance -= amount
            destination.balance += amount
            self._record(source, debit)
            self._record(destination, credit)

            log_action(
                self.logger, "info", f"Transfer of {format_amount(amount)}",
                action="transfer", resource=f"customer:{source.id}",
                extra={
                    "destination_id": destination.id,
                    "transaction_ids": [debit.id, credit.id],
                    "source_balance": str(source.balance),
                    "destination_balance": str(destination.balance)
                }
            )
            return LedgerResult(
                success=True,
                balances={source.id: source.balance, destination.id: destination.balance},
                message="Transfer completed",
                transactions=(debit, credit)
            )

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------

    def get_history(self, customer_id: int) -> List[Transaction]:
        """A customer's transactions in insertion order"""
        _require_id(customer_id)
        with self._lock:
            return list(self._get_or_raise(customer_id).history)

    def list_transactions(self) -> List[Transaction]:
        """Every transaction in the ledger, in id order"""
        with self._lock:
            return self._log.all()

    def total_balance(self) -> Decimal:
        """Sum of all customer balances"""
        with self._lock:
            return sum((c.balance for c in self._customers.values()), ZERO)

    def __len__(self) -> int:
        with self._lock:
            return len(self._customers)

    # ------------------------------------------------------------------
    # Internals; callers must hold self._lock
    # ------------------------------------------------------------------

    def _get_or_raise(self, customer_id: int) -> Customer:
        customer = self._customers.get(customer_id)
        if customer is None:
            raise NotFoundError([customer_id])
        return customer

    def _new_transaction(
        self,
        kind: TransactionType,
        customer_id: int,
        amount: Decimal,
        description: str,
        counterparty_id: Optional[int] = None
    ) -> Transaction:
        transaction = Transaction(
            id=self._next_transaction_id,
            kind=kind,
            amount=amount,
            timestamp=self._clock(),
            customer_id=customer_id,
            description=description,
            counterparty_id=counterparty_id
        )
        self._next_transaction_id += 1
        return transaction

    def _record(self, customer: Customer, transaction: Transaction) -> None:
        self._log.append(transaction)
        customer.history.append(transaction)

    def _decline_insufficient_funds(
        self,
        action: str,
        customer: Customer,
        amount: Decimal,
        balances: Dict[int, Decimal]
    ) -> LedgerResult:
        message = (
            f"Insufficient funds: balance {customer.balance} minus {amount} "
            f"would exceed the overdraft limit of {customer.credit_limit}"
        )
        log_action(
            self.logger, "warning", "Operation declined: insufficient funds",
            action=action, resource=f"customer:{customer.id}",
            extra={"amount": str(amount), "balance": str(customer.balance)}
        )
        return LedgerResult(
            success=False,
            balances=balances,
            message=message,
            decline_reason=DeclineReason.INSUFFICIENT_FUNDS
        )
