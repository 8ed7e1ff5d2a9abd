"""
Test suite for transaction records and the append-only log
"""

import pytest
from decimal import Decimal
from datetime import datetime, timezone

from digital_bank.transactions import Transaction, TransactionLog, TransactionType


NOW = datetime(2024, 1, 1, tzinfo=timezone.utc)


def make_transaction(txn_id, kind=TransactionType.DEPOSIT, customer_id=1,
                     amount=Decimal('10.00'), counterparty_id=None):
    return Transaction(
        id=txn_id,
        kind=kind,
        amount=amount,
        timestamp=NOW,
        customer_id=customer_id,
        description=kind.value,
        counterparty_id=counterparty_id
    )


class TestTransaction:
    """Test transaction record validation"""

    def test_amount_must_be_positive(self):
        with pytest.raises(ValueError):
            make_transaction(1, amount=Decimal('0'))

    def test_transfer_requires_counterparty(self):
        with pytest.raises(ValueError):
            make_transaction(1, kind=TransactionType.TRANSFER_OUT)

    def test_deposit_rejects_counterparty(self):
        with pytest.raises(ValueError):
            make_transaction(1, counterparty_id=2)

    def test_records_are_immutable(self):
        txn = make_transaction(1)
        with pytest.raises(AttributeError):
            txn.amount = Decimal('99')

    def test_signed_amount(self):
        assert make_transaction(1).signed_amount == Decimal('10.00')
        assert make_transaction(2, kind=TransactionType.WITHDRAWAL).signed_amount == Decimal('-10.00')
        out = make_transaction(3, kind=TransactionType.TRANSFER_OUT, counterparty_id=2)
        assert out.signed_amount == Decimal('-10.00')

    def test_to_dict(self):
        txn = make_transaction(4, kind=TransactionType.TRANSFER_IN, counterparty_id=7)
        data = txn.to_dict()
        assert data["kind"] == "transfer_in"
        assert data["amount"] == "10.00"
        assert data["counterparty_id"] == 7
        assert data["timestamp"] == NOW.isoformat()


class TestTransactionLog:
    """Test the append-only log"""

    def test_append_and_filter(self):
        log = TransactionLog()
        log.append(make_transaction(1, customer_id=1))
        log.append(make_transaction(2, customer_id=2))
        log.append(make_transaction(3, customer_id=1))

        assert len(log) == 3
        assert [t.id for t in log.for_customer(1)] == [1, 3]
        assert [t.id for t in log.all()] == [1, 2, 3]

    def test_ids_must_increase(self):
        log = TransactionLog()
        log.append(make_transaction(5))
        with pytest.raises(ValueError):
            log.append(make_transaction(5))

    def test_all_returns_a_copy(self):
        log = TransactionLog()
        log.append(make_transaction(1))
        entries = log.all()
        entries.clear()
        assert len(log) == 1
