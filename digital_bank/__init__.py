"""
Digital Bank

An in-memory banking demo: customer registry, deposits, withdrawals and
transfers against an overdraft limit, with CPF validation and a per-customer
transaction history. All monetary values use Decimal.
"""

__version__ = "1.0.0"
