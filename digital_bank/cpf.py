"""
CPF Validation Module

Validates Brazilian individual taxpayer numbers (CPF): eleven digits, the
last two of which are mod-11 check digits over the preceding ones.
"""

from typing import List, Optional
import re

CPF_LENGTH = 11

# Digits plus the punctuation used in the formatted "000.000.000-00" form
_ALLOWED_PATTERN = re.compile(r'[0-9.\-\s]*', re.ASCII)


def normalize_cpf(value: str) -> Optional[str]:
    """
    Strip formatting from a CPF

    Returns:
        The bare digit string, or None if the input contains anything other
        than digits, dots, dashes and whitespace
    """
    if not isinstance(value, str) or not _ALLOWED_PATTERN.fullmatch(value):
        return None
    return re.sub(r'[^0-9]', '', value)


def _check_digit(digits: List[int]) -> int:
    """Compute one check digit; weights run from len(digits)+1 down to 2"""
    weight = len(digits) + 1
    total = sum(d * w for d, w in zip(digits, range(weight, 1, -1)))
    remainder = total % 11
    return 0 if remainder < 2 else 11 - remainder


def is_valid_cpf(value: str) -> bool:
    """
    Check a CPF against its two check digits

    Repeated-digit sequences such as "11111111111" satisfy the checksum but
    are never issued, so they are rejected.
    """
    cpf = normalize_cpf(value)
    if cpf is None or len(cpf) != CPF_LENGTH:
        return False

    if len(set(cpf)) == 1:
        return False

    digits = [int(c) for c in cpf]
    first = _check_digit(digits[:9])
    second = _check_digit(digits[:9] + [first])

    return digits[9] == first and digits[10] == second


def format_cpf(value: str) -> str:
    """Render an 11-digit CPF as 000.000.000-00"""
    cpf = normalize_cpf(value)
    if cpf is None or len(cpf) != CPF_LENGTH:
        raise ValueError(f"Cannot format '{value}' as a CPF")
    return f"{cpf[:3]}.{cpf[3:6]}.{cpf[6:9]}-{cpf[9:]}"
