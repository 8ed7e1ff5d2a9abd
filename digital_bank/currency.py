"""
Monetary Amount Module

Single-currency (BRL) amount handling with proper Decimal precision.
NEVER uses float for monetary values.
"""

from decimal import Decimal, ROUND_HALF_UP, InvalidOperation, getcontext
from typing import Any
import re

from .exceptions import InvalidArgumentError

# Set global decimal context for financial precision
getcontext().prec = 28

CURRENCY_CODE = "BRL"
PRECISION = 2  # Centavos

ZERO = Decimal("0.00")

# Optional sign, ASCII digits, "." and "," separators; no exponents
_AMOUNT_PATTERN = re.compile(r'[+-]?[0-9][0-9.,]*', re.ASCII)


def quantize(value: Decimal) -> Decimal:
    """Round a Decimal to two fractional digits"""
    return value.quantize(Decimal('0.1') ** PRECISION, rounding=ROUND_HALF_UP)


def decimal_from_string(value: str) -> Decimal:
    """
    Safely convert string to Decimal, handling common formats

    Accepts "1234.56", "1,234.56" and the Brazilian "1234,56".

    Args:
        value: String representation of number

    Returns:
        Decimal value

    Raises:
        InvalidArgumentError: If string cannot be converted to valid Decimal
    """
    if not value or not isinstance(value, str):
        raise InvalidArgumentError("Amount must be a non-empty string")

    # Only a leading "R$" and surrounding whitespace may be dropped
    clean_value = value.strip()
    if clean_value.startswith('R$'):
        clean_value = clean_value[2:].strip()

    if not _AMOUNT_PATTERN.fullmatch(clean_value):
        raise InvalidArgumentError(f"Cannot convert '{value}' to an amount")

    if ',' in clean_value and '.' in clean_value:
        # Both comma and dot - assume comma is thousands separator
        clean_value = clean_value.replace(',', '')
    elif ',' in clean_value and clean_value.count(',') == 1:
        parts = clean_value.split(',')
        if len(parts[1]) <= 2:  # Decimal separator
            clean_value = clean_value.replace(',', '.')
        else:  # Thousands separator
            clean_value = clean_value.replace(',', '')

    try:
        return Decimal(clean_value)
    except InvalidOperation:
        raise InvalidArgumentError(f"Cannot convert '{value}' to an amount")


def to_amount(value: Any, field_name: str = "amount") -> Decimal:
    """
    Coerce a caller-supplied value into a two-digit Decimal

    Strings go through decimal_from_string, floats through their string
    form. Booleans and non-finite values are rejected.

    Raises:
        InvalidArgumentError: If the value is not a usable amount
    """
    if isinstance(value, bool) or value is None:
        raise InvalidArgumentError(f"{field_name} must be a decimal number")

    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, str):
        amount = decimal_from_string(value)
    elif isinstance(value, (int, float)):
        amount = Decimal(str(value))
    else:
        raise InvalidArgumentError(f"{field_name} must be a decimal number")

    if not amount.is_finite():
        raise InvalidArgumentError(f"{field_name} must be a finite number")

    try:
        return quantize(amount)
    except InvalidOperation:
        raise InvalidArgumentError(f"{field_name} is out of range")


def to_positive_amount(value: Any, field_name: str = "amount") -> Decimal:
    """Coerce to a Decimal amount and require it to be strictly positive"""
    amount = to_amount(value, field_name)
    if amount <= ZERO:
        raise InvalidArgumentError(f"{field_name} must be greater than zero")
    return amount


def format_amount(amount: Decimal) -> str:
    """Format for display"""
    return f"{CURRENCY_CODE} {amount:,.{PRECISION}f}"
