"""Object identifier comparison and BITS / TruthValue conversions."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

ZERO_DOT_ZERO: tuple[int, ...] = (0, 0)

TRUTH_TRUE = 1
TRUTH_FALSE = 2


@dataclass(frozen=True)
class OidRange:
    """Inclusive bounds for one sub-identifier."""

    min: int
    max: int


def oid_compare(oid1: Sequence[int], oid2: Sequence[int]) -> int:
    """Return -1, 0 or 1 as ``oid1`` sorts before, equal to or after ``oid2``."""
    a, b = tuple(oid1), tuple(oid2)
    if a < b:
        return -1
    if a > b:
        return 1
    return 0


def oid_equal(oid1: Sequence[int], oid2: Sequence[int]) -> bool:
    return oid_compare(oid1, oid2) == 0


def oid_in_range(oid: Sequence[int], ranges: Sequence[OidRange]) -> bool:
    """True if ``oid`` has one sub-identifier per range, each inside its bounds."""
    if len(oid) != len(ranges):
        return False
    return all(r.min <= sub <= r.max for sub, r in zip(oid, ranges))


def decode_bits(data: bytes) -> int:
    """Decode a BITS octet string; bit 0 is the most significant bit of the first octet."""
    value = 0
    processed = 0
    for octet in data:
        if octet == 0:
            processed += 8
            continue
        if processed >= 32:
            raise ValueError("BITS value has more than 32 bits set")
        for shift in range(7, -1, -1):
            if octet & (1 << shift):
                value |= 1 << processed
            processed += 1
    return value


def encode_bits(bit_value: int, bit_count: int, max_len: int | None = None) -> bytes:
    """Encode a BITS value, padding to cover ``bit_count`` bits, at most ``max_len`` octets."""
    limit = max_len if max_len is not None else float("inf")
    bit_value &= 0xFFFFFFFF
    out = bytearray()
    while len(out) < limit and bit_value:
        octet = 0
        for shift in range(7, -1, -1):
            if bit_value & 1:
                octet |= 1 << shift
            bit_value >>= 1
        out.append(octet)
    min_bytes = (bit_count + 7) >> 3
    while len(out) < min_bytes and len(out) < limit:
        out.append(0)
    return bytes(out)


def decode_truthvalue(value: int) -> bool:
    """Map a TruthValue integer (true(1), false(2)) to a bool."""
    if value == TRUTH_TRUE:
        return True
    if value == TRUTH_FALSE:
        return False
    raise ValueError(f"invalid TruthValue {value}")


def encode_truthvalue(value: object) -> int:
    """Map a truthy value to TruthValue true(1), otherwise false(2)."""
    return TRUTH_TRUE if value else TRUTH_FALSE