"""Digit string helpers shared by the checksum engines"""

import re

from fintools_gateway.domain.exceptions import InvalidInputFormatError, InvalidInputLengthError

_NON_DIGIT = re.compile(r"[^0-9]")


def clean_digits(value: str) -> str:
    """Strip everything that is not an ASCII digit"""
    return _NON_DIGIT.sub("", value or "")


def require_digits(value: str, length: int, label: str) -> str:
    """
    Return value unchanged if it is exactly `length` ASCII digits.

    Raises:
        InvalidInputFormatError: value contains non-digit characters
        InvalidInputLengthError: value has the wrong number of digits
    """
    if not value.isascii() or not value.isdigit():
        raise InvalidInputFormatError(f"{label} must contain digits only, got {value!r}")
    if len(value) != length:
        raise InvalidInputLengthError(f"{label} must have exactly {length} digits, got {len(value)}")
    return value
