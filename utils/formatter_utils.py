# MIT License
#
# Copyright (c) 2018 Evgeny Medvedev, evge.medvedev@gmail.com
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in all
# copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.
#
# Modified by: Cuong CT, 6/12/2025
# Change Description: using eth_utils library for implement some formatter utilities

from decimal import Decimal, InvalidOperation
from typing import Optional

from eth_utils import encode_hex
from eth_utils import to_checksum_address as eth_to_normalized_address
from hexbytes import HexBytes

from utils.logger_utils import get_logger

logger = get_logger("Formatter Utils")


def to_decimal_or_none(val: int | float | str | Decimal | None) -> Decimal | None:
    """
    Parses a user supplied number (int, float or numeric text) into a finite Decimal.
    """
    if isinstance(val, bool) or val is None:
        return None
    if isinstance(val, Decimal):
        return val if val.is_finite() else None
    text = str(val).strip()
    if text == "":
        return None
    try:
        result = Decimal(text)
    except (InvalidOperation, ValueError):
        logger.debug(f"Cannot convert value to decimal: {val}")
        return None
    return result if result.is_finite() else None


def to_normalized_address(address: Optional[str]) -> Optional[str]:
    """
    Convert address to its EIP-55 checksum form.
    Safe-guards against None or invalid types.
    """
    if address is None or not isinstance(address, str):
        return None

    try:
        return eth_to_normalized_address(address)
    except ValueError:
        logger.debug(f"Cannot normalize address: {address}")
        return None


def to_bytes_data(data: bytes | str | None) -> bytes:
    """
    Accepts raw bytes or a 0x-prefixed hex string and returns bytes.
    None and "0x" both map to an empty payload.
    """
    if data is None:
        return b""
    return bytes(HexBytes(data))


def to_hex_data(data: bytes) -> str:
    """Renders bytes as a 0x-prefixed lowercase hex string."""
    return encode_hex(data)


def format_address(address: str) -> str:
    """Shortens an address for display, e.g. 0x1234...abcd."""
    if len(address) <= 10:
        return address
    return f"{address[:6]}...{address[-4:]}"


def to_fixed_point(amount: Decimal, decimals: int) -> int:
    """
    Scales a decimal amount to an integer with the given number of decimals,
    e.g. Decimal("1.5") with 18 decimals -> 1500000000000000000.
    Uses integer arithmetic so large amounts are not rounded by the decimal context.

    Raises:
        ValueError: If the amount has more fractional digits than supported.
    """
    sign, digits, exponent = amount.as_tuple()
    # Trailing zeros only move the exponent
    digits = list(digits)
    while len(digits) > 1 and digits[-1] == 0:
        digits.pop()
        exponent += 1
    coefficient = int("".join(str(digit) for digit in digits) or "0")
    shift = exponent + decimals
    if shift >= 0:
        scaled = coefficient * 10**shift
    else:
        scaled, remainder = divmod(coefficient, 10**-shift)
        if remainder:
            raise ValueError(f"Amount {amount} has more than {decimals} decimal places")
    return -scaled if sign else scaled
