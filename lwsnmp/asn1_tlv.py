"""BER type-length-value headers as used by SNMP, plus byte stream helpers."""

from __future__ import annotations

from dataclasses import dataclass

TLV_INDEFINITE_LENGTH = 0x80

CLASS_MASK = 0xC0
CONTENTTYPE_MASK = 0x20
DATATYPE_MASK = 0x1F
DATATYPE_EXTENDED = 0x1F

CONTEXT_PDU_GET_REQ = 0
CONTEXT_PDU_GET_NEXT_REQ = 1
CONTEXT_PDU_GET_RESP = 2
CONTEXT_PDU_SET_REQ = 3
CONTEXT_PDU_TRAP = 4
CONTEXT_PDU_GET_BULK_REQ = 5
CONTEXT_PDU_INFORM_REQ = 6
CONTEXT_PDU_V2_TRAP = 7
CONTEXT_PDU_REPORT = 8

CONTEXT_VARBIND_NO_SUCH_OBJECT = 0
CONTEXT_VARBIND_END_OF_MIB_VIEW = 2


class Asn1Error(Exception):
    """Raised when a value cannot be encoded or decoded."""


class BerWriter:
    """Collects encoded octets, optionally bounded by a capacity."""

    def __init__(self, capacity: int | None = None) -> None:
        self._buffer = bytearray()
        self._capacity = capacity

    def write(self, value: int) -> None:
        """Append a single octet (only the low 8 bits are kept)."""
        self._ensure_room(1)
        self._buffer.append(value & 0xFF)

    def write_bytes(self, data: bytes) -> None:
        """Append several octets."""
        self._ensure_room(len(data))
        self._buffer.extend(data)

    def getvalue(self) -> bytes:
        """Return everything written so far."""
        return bytes(self._buffer)

    def __len__(self) -> int:
        return len(self._buffer)

    def _ensure_room(self, count: int) -> None:
        if self._capacity is not None and len(self._buffer) + count > self._capacity:
            raise Asn1Error("output buffer exhausted")


class BerReader:
    """Reads octets from an in-memory buffer."""

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)
        self._pos = 0

    def read(self) -> int:
        """Return the next octet."""
        if self._pos >= len(self._data):
            raise Asn1Error("input exhausted")
        value = self._data[self._pos]
        self._pos += 1
        return value

    def read_bytes(self, count: int) -> bytes:
        """Return the next ``count`` octets."""
        if count < 0 or self._pos + count > len(self._data):
            raise Asn1Error("input exhausted")
        chunk = self._data[self._pos:self._pos + count]
        self._pos += count
        return chunk

    def remaining(self) -> int:
        """Number of octets not yet read."""
        return len(self._data) - self._pos


@dataclass
class Tlv:
    """A TLV header; zero lengths mean 'choose automatically' when encoding."""

    type: int
    type_len: int = 0
    length_len: int = 0
    value_len: int = 0

    def header_length(self) -> int:
        return self.type_len + self.length_len

    def total_length(self) -> int:
        return self.type_len + self.length_len + self.value_len


def length_octets(length: int) -> int:
    """Number of octets needed to encode a length field."""
    if length < 0x80:
        return 1
    if length < 0x100:
        return 2
    return 3


def encode_tlv(writer: BerWriter, tlv: Tlv) -> None:
    """Write a TLV header; fills in ``type_len`` and an automatic ``length_len``."""
    if (tlv.type & DATATYPE_MASK) == DATATYPE_EXTENDED:
        raise Asn1Error("extended type encoding is not supported")
    if tlv.type_len != 0:
        raise Asn1Error("type length must be automatic")

    writer.write(tlv.type)
    tlv.type_len = 1

    if tlv.value_len <= 127:
        required = 1
    elif tlv.value_len <= 255:
        required = 2
    else:
        required = 3

    if tlv.length_len > 0:
        if tlv.length_len < required:
            raise Asn1Error("length does not fit in requested number of octets")
        required = tlv.length_len
    else:
        tlv.length_len = required

    if required > 1:
        required -= 1
        writer.write(0x80 | required)
        while required > 1:
            writer.write((tlv.value_len >> 8) & 0xFF if required == 2 else 0x00)
            required -= 1

    writer.write(tlv.value_len & 0xFF)


def decode_tlv(reader: BerReader) -> Tlv:
    """Read a TLV header."""
    type_ = reader.read()
    if (type_ & DATATYPE_MASK) == DATATYPE_EXTENDED:
        raise Asn1Error("extended type encoding is not supported")
    tlv = Tlv(type=type_, type_len=1)

    data = reader.read()
    if data < 0x80:
        tlv.length_len = 1
        tlv.value_len = data
    elif data > 0x80:
        length_bytes = data - 0x80
        if length_bytes > reader.remaining():
            raise Asn1Error("length field exceeds input")
        tlv.length_len = length_bytes + 1
        value_len = 0
        for _ in range(length_bytes):
            if value_len > 0xFF:
                raise Asn1Error("length too large")
            value_len = (value_len << 8) | reader.read()
            if value_len == 0xFFFF:
                raise Asn1Error("length too large")
        tlv.value_len = value_len
    else:
        raise Asn1Error("indefinite length form is not allowed")

    return tlv