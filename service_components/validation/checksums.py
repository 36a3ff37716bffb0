"""
Checksum validation for Ukrainian national identifiers.

- Company registration number (EDRPOU): 8 digits, last digit is the checksum.
- Taxpayer identification number (RNOKPP): 10 digits, last digit is the checksum.

Example:
    from service_components.validation import is_valid_company_number

    is_valid_company_number("32855961")  # True
    is_valid_company_number("32855962")  # False
"""

from typing import List, Sequence

COMPANY_NUMBER_LENGTH = 8
TAXPAYER_NUMBER_LENGTH = 10

# EDRPOU numbers in this inclusive range use the second weight table
COMPANY_NUMBER_RANGE = (30_000_000, 60_000_000)

COMPANY_WEIGHTS_OUTSIDE_RANGE = (1, 2, 3, 4, 5, 6, 7)
COMPANY_WEIGHTS_OUTSIDE_RANGE_RETRY = (3, 4, 5, 6, 7, 8, 9)
COMPANY_WEIGHTS_IN_RANGE = (7, 1, 2, 3, 4, 5, 6)
COMPANY_WEIGHTS_IN_RANGE_RETRY = (9, 3, 4, 5, 6, 7, 8)

TAXPAYER_WEIGHTS = (-1, 5, 7, 9, 4, 6, 10, 5, 7)


def _digits(value: str, length: int) -> List[int]:
    """Return the digits of value, or an empty list if it is not exactly `length` ASCII digits."""
    if not isinstance(value, str) or len(value) != length:
        return []
    if not (value.isascii() and value.isdigit()):
        return []
    return [int(ch) for ch in value]


def _weighted_mod11(digits: Sequence[int], weights: Sequence[int]) -> int:
    # Python's % always yields 0..10 for a positive modulus, even for negative sums
    return sum(d * w for d, w in zip(digits, weights)) % 11


def company_number_checksum(value: str) -> int:
    """
    Compute the expected check digit of an EDRPOU number.

    Args:
        value: 8-digit company registration number

    Returns:
        The computed check digit (0-10)

    Raises:
        ValueError: If value is not exactly 8 ASCII digits
    """
    digits = _digits(value, COMPANY_NUMBER_LENGTH)
    if not digits:
        raise ValueError(f"Company number must be exactly {COMPANY_NUMBER_LENGTH} digits")

    number = int(value)
    low, high = COMPANY_NUMBER_RANGE
    if number < low or number > high:
        weights, retry = COMPANY_WEIGHTS_OUTSIDE_RANGE, COMPANY_WEIGHTS_OUTSIDE_RANGE_RETRY
    else:
        weights, retry = COMPANY_WEIGHTS_IN_RANGE, COMPANY_WEIGHTS_IN_RANGE_RETRY

    result = _weighted_mod11(digits[:7], weights)
    if result == 10:
        result = _weighted_mod11(digits[:7], retry)
    return result


def is_valid_company_number(value: str) -> bool:
    """Check an 8-digit company registration number (EDRPOU) against its checksum."""
    digits = _digits(value, COMPANY_NUMBER_LENGTH)
    if not digits:
        return False
    return company_number_checksum(value) == digits[7]


def taxpayer_number_checksum(value: str) -> int:
    """
    Compute the expected check digit of a taxpayer identification number.

    The first weight is negative, so the weighted sum can be negative; the
    result is the mathematical modulo, always in 0..10.

    Args:
        value: 10-digit taxpayer identification number

    Returns:
        The computed check digit (0-10)

    Raises:
        ValueError: If value is not exactly 10 ASCII digits
    """
    digits = _digits(value, TAXPAYER_NUMBER_LENGTH)
    if not digits:
        raise ValueError(f"Taxpayer number must be exactly {TAXPAYER_NUMBER_LENGTH} digits")
    return _weighted_mod11(digits[:9], TAXPAYER_WEIGHTS)


def is_valid_taxpayer_number(value: str) -> bool:
    """Check a 10-digit taxpayer identification number against its checksum."""
    digits = _digits(value, TAXPAYER_NUMBER_LENGTH)
    if not digits:
        return False
    return taxpayer_number_checksum(value) == digits[9]
