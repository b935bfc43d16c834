import re
from decimal import Decimal

from constants.constants import (
    ADDRESS_PATTERN,
    BOOLEAN_FALSE_VALUES,
    BOOLEAN_TRUE_VALUES,
    TOKEN_DECIMALS,
    UINT256_MAX,
    UINT256_MAX_DIGITS,
)
from utils.formatter_utils import to_decimal_or_none, to_fixed_point

_ADDRESS_RE = re.compile(ADDRESS_PATTERN)


def is_blank(value) -> bool:
    """
    A value counts as absent when it is None or text made only of whitespace.
    """
    if value is None:
        return True
    return isinstance(value, str) and value.strip() == ""


def is_valid_address(value) -> bool:
    """
    Validate a 0x-prefixed, 40 hex character address (case-insensitive).
    """
    return isinstance(value, str) and _ADDRESS_RE.fullmatch(value) is not None


def parse_positive_amount(value) -> Decimal | None:
    """
    Parse an amount that must be strictly greater than zero.

    Returns:
        The amount as a Decimal, or None if the value is not a positive number.
    """
    amount = to_decimal_or_none(value)
    if amount is None or amount <= 0:
        return None
    return amount


def fits_token_decimals(amount: Decimal, decimals: int = TOKEN_DECIMALS) -> bool:
    """
    Check that an amount has no more significant fractional digits than the token supports.
    Trailing zeros past the supported precision are accepted.
    """
    _, digits, exponent = amount.as_tuple()
    extra = -exponent - decimals
    if extra <= 0:
        return True
    return all(digit == 0 for digit in digits[-extra:])


def fits_uint256(amount: Decimal, decimals: int = TOKEN_DECIMALS) -> bool:
    """
    Check that an amount, once scaled by 10**decimals, fits in a uint256 word.
    The magnitude is checked on the exponent first so huge exponents are never expanded.
    Expects an amount that already passed fits_token_decimals.
    """
    if amount.adjusted() + decimals >= UINT256_MAX_DIGITS:
        return False
    return abs(to_fixed_point(amount, decimals)) <= UINT256_MAX


def parse_boolean(value) -> bool | None:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in BOOLEAN_TRUE_VALUES:
        return True
    if text in BOOLEAN_FALSE_VALUES:
        return False
    return None


def matches_pattern(value, pattern: str) -> bool:
    return re.fullmatch(pattern, str(value)) is not None
