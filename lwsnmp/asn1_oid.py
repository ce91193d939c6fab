"""BER encoding of object identifiers and raw octet strings."""

from __future__ import annotations

from collections.abc import Sequence

from .asn1_tlv import Asn1Error, BerReader, BerWriter

_U32_MASK = 0xFFFFFFFF


def oid_octets(oid: Sequence[int]) -> int:
    """Number of octets the BER encoding of ``oid`` takes."""
    subs = list(oid)
    count = 0
    if len(subs) > 1:
        count += 1
        subs = subs[2:]
    for sub_id in subs:
        sub_id >>= 7
        count += 1
        while sub_id > 0:
            sub_id >>= 7
            count += 1
    return count


def encode_oid(writer: BerWriter, oid: Sequence[int]) -> None:
    """Write an object identifier; it needs at least two sub-identifiers."""
    subs = list(oid)
    if len(subs) < 2:
        raise Asn1Error("object identifier needs at least two sub-identifiers")
    for sub_id in subs:
        if not 0 <= sub_id <= _U32_MASK:
            raise Asn1Error(f"sub-identifier {sub_id} out of range")

    writer.write((subs[0] * 40 + subs[1]) & 0xFF)
    for sub_id in subs[2:]:
        tail = False
        for shift in (28, 21, 14, 7):
            code = (sub_id >> shift) & 0xFF
            if code or tail:
                tail = True
                writer.write(code | 0x80)
        writer.write(sub_id & 0x7F)


def decode_oid(reader: BerReader, length: int, max_len: int) -> tuple[int, ...]:
    """Read an object identifier of ``length`` octets with at most ``max_len`` sub-identifiers."""
    if length <= 0:
        # zero length identifiers are valid, e.g. for getnext
        return ()
    if max_len < 2:
        raise Asn1Error("object identifier buffer too small")

    first = reader.read()
    length -= 1
    if first == 0x2B:
        result = [1, 3]
    elif first < 40:
        result = [0, first]
    elif first < 80:
        result = [1, first - 40]
    else:
        result = [2, first - 80]

    while length > 0 and len(result) < max_len:
        data = reader.read()
        length -= 1
        if data & 0x80 == 0:
            result.append(data)
            continue
        sub_id = data & 0x7F
        while length > 0 and data & 0x80:
            data = reader.read()
            length -= 1
            sub_id = ((sub_id << 7) + (data & 0x7F)) & _U32_MASK
        if data & 0x80:
            raise Asn1Error("sub-identifier truncated")
        result.append(sub_id)

    if length > 0:
        raise Asn1Error("object identifier too long")
    return tuple(result)


def encode_raw(writer: BerWriter, data: bytes) -> None:
    """Write raw octets (octet string, opaque, ip address)."""
    writer.write_bytes(bytes(data))


def decode_raw(reader: BerReader, length: int, max_len: int) -> bytes:
    """Read ``length`` raw octets, which may not exceed ``max_len``."""
    if length > max_len:
        raise Asn1Error("not enough room for raw value")
    return reader.read_bytes(length)