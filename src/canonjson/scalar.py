from __future__ import annotations

import math

from .constants import I64_MAX, I64_MIN, U64_MAX
from .exceptions import NonCanonicalNumber


def encode_bool(value: bool) -> bytes:
    return b"true" if value else b"false"


def encode_int(value: int) -> bytes:
    """Minimal decimal digits for any value in the 64-bit signed/unsigned range."""
    if not I64_MIN <= value <= U64_MAX:
        raise NonCanonicalNumber(value)
    return str(int(value)).encode("ascii")


def encode_float(value: float) -> bytes:
    """Encode a float that is exactly an integer; reject everything else.

    NaN, infinities, values with a fractional part, and values whose
    truncation does not survive a round trip through a signed 64-bit integer
    all fail with :class:`NonCanonicalNumber`.
    """
    if math.isnan(value) or math.isinf(value):
        raise NonCanonicalNumber(value)
    if not value.is_integer():
        raise NonCanonicalNumber(value)
    truncated = int(value)
    if not I64_MIN <= truncated <= I64_MAX or float(truncated) != value:
        raise NonCanonicalNumber(value)
    return str(truncated).encode("ascii")


def check_char(value: str) -> str:
    if not isinstance(value, str) or len(value) != 1:
        raise ValueError(f"expected a single character, got {value!r}")
    return value
