"""BER encoding of SNMP integers: signed 32 bit, unsigned 32 and 64 bit."""

from __future__ import annotations

from .asn1_tlv import Asn1Error, BerReader, BerWriter

_U32_MASK = 0xFFFFFFFF
_U64_MASK = 0xFFFFFFFFFFFFFFFF


def u32_octets(value: int) -> int:
    """Octets needed for an unsigned 32 bit value (a leading sign octet included)."""
    value &= _U32_MASK
    if value < 0x80:
        return 1
    if value < 0x8000:
        return 2
    if value < 0x800000:
        return 3
    if value < 0x80000000:
        return 4
    return 5


def s32_octets(value: int) -> int:
    """Octets needed for a signed 32 bit value."""
    if value < 0:
        value = ~value
    if value < 0x80:
        return 1
    if value < 0x8000:
        return 2
    if value < 0x800000:
        return 3
    return 4


def u64_octets(value: int) -> int:
    """Octets needed for an unsigned 64 bit value (a leading sign octet included)."""
    value &= _U64_MASK
    high = value >> 32
    if high == 0:
        return u32_octets(value)
    return u32_octets(high) + 4


def _write_big_endian(writer: BerWriter, octets: int, value: int) -> None:
    for remaining in range(octets - 1, 0, -1):
        writer.write((value >> (remaining * 8)) & 0xFF)
    # always at least one octet, also for a zero value
    writer.write(value & 0xFF)


def encode_u32(writer: BerWriter, octets_needed: int, value: int) -> None:
    """Write an unsigned 32 bit value using ``octets_needed`` octets (see ``u32_octets``)."""
    if octets_needed > 5:
        raise Asn1Error("unsigned 32 bit value needs at most 5 octets")
    value &= _U32_MASK
    if octets_needed == 5:
        writer.write(0x00)
        octets_needed -= 1
    _write_big_endian(writer, octets_needed, value)


def encode_s32(writer: BerWriter, octets_needed: int, value: int) -> None:
    """Write a signed 32 bit value using ``octets_needed`` octets (see ``s32_octets``)."""
    _write_big_endian(writer, octets_needed, value)


def encode_u64(writer: BerWriter, octets_needed: int, value: int) -> None:
    """Write an unsigned 64 bit value using ``octets_needed`` octets (see ``u64_octets``)."""
    if octets_needed > 9:
        raise Asn1Error("unsigned 64 bit value needs at most 9 octets")
    value &= _U64_MASK
    if octets_needed == 9:
        writer.write(0x00)
        octets_needed -= 1
    _write_big_endian(writer, octets_needed, value)


def _decode_unsigned(reader: BerReader, length: int, max_len: int) -> int:
    if not 0 < length <= max_len:
        raise Asn1Error(f"invalid integer length {length}")
    first = reader.read()
    if length == max_len:
        valid = first == 0x00
    else:
        valid = (first & 0x80) == 0
    if not valid:
        raise Asn1Error("unsigned value has its sign bit set")
    value = first
    for _ in range(length - 1):
        value = (value << 8) | reader.read()
    return value


def decode_u32(reader: BerReader, length: int) -> int:
    """Read an unsigned 32 bit value (counter, gauge, timeticks) of ``length`` octets."""
    return _decode_unsigned(reader, length, 5)


def decode_u64(reader: BerReader, length: int) -> int:
    """Read an unsigned 64 bit value (counter64) of ``length`` octets."""
    return _decode_unsigned(reader, length, 9)


def decode_s32(reader: BerReader, length: int) -> int:
    """Read a signed 32 bit value of ``length`` octets."""
    if not 0 < length < 5:
        raise Asn1Error(f"invalid integer length {length}")
    first = reader.read()
    value = ((-1 << 8) | first) if first & 0x80 else first
    for _ in range(length - 1):
        value = (value << 8) | reader.read()
    return value