import pytest

from lwsnmp.asn1_int import (
    decode_s32,
    decode_u32,
    decode_u64,
    encode_s32,
    encode_u32,
    encode_u64,
    s32_octets,
    u32_octets,
    u64_octets,
)
from lwsnmp.asn1_tlv import Asn1Error, BerReader, BerWriter


def _enc(func, octets, value, capacity=None):
    writer = BerWriter(capacity)
    func(writer, octets, value)
    return writer.getvalue()


def test_u32_leading_sign_octet_example():
    # +0xFFFF is coded as 0x00,0xFF,0xFF
    assert _enc(encode_u32, u32_octets(0xFFFF), 0xFFFF) == b"\x00\xff\xff"


def test_u32_max_needs_five_octets():
    assert u32_octets(0xFFFFFFFF) == 5


def test_u64_max_needs_nine_octets():
    assert u64_octets(0xFFFFFFFFFFFFFFFF) == 9


@pytest.mark.parametrize(
    "value",
    [0, 1, 0x7F, 0x80, 0x7FFF, 0x8000, 0x7FFFFF, 0x800000, 0x7FFFFFFF, 0x80000000, 0xFFFFFFFF],
)
def test_u32_round_trip(value):
    octets = u32_octets(value)
    data = _enc(encode_u32, octets, value)
    assert len(data) == octets
    assert decode_u32(BerReader(data), len(data)) == value


@pytest.mark.parametrize(
    "value",
    [0, -1, 0x7F, -0x80, 0x80, -0x81, 0x7FFF, -0x8000, 0x800000, 0x7FFFFFFF, -0x80000000],
)
def test_s32_round_trip(value):
    octets = s32_octets(value)
    data = _enc(encode_s32, octets, value)
    assert len(data) == octets
    assert decode_s32(BerReader(data), len(data)) == value


@pytest.mark.parametrize(
    "value",
    [0, 0x7F, 0xFFFFFFFF, 0x100000000, 0x7FFFFFFFFFFFFFFF, 0xFFFFFFFFFFFFFFFF],
)
def test_u64_round_trip(value):
    octets = u64_octets(value)
    data = _enc(encode_u64, octets, value)
    assert len(data) == octets
    assert decode_u64(BerReader(data), len(data)) == value


def test_octet_counts_are_monotonic():
    values = [0, 0x80, 0x8000, 0x800000, 0x80000000]
    counts = [u32_octets(v) for v in values]
    assert counts == sorted(counts)
    assert len(set(counts)) == len(counts)


def test_encode_u32_rejects_too_many_octets():
    with pytest.raises(Asn1Error):
        _enc(encode_u32, 6, 1)


def test_encode_u64_rejects_too_many_octets():
    with pytest.raises(Asn1Error):
        _enc(encode_u64, 10, 1)


@pytest.mark.parametrize("length", [0, 6])
def test_decode_u32_rejects_bad_length(length):
    with pytest.raises(Asn1Error):
        decode_u32(BerReader(b"\x00" * 8), length)


def test_decode_u32_rejects_sign_bit():
    with pytest.raises(Asn1Error):
        decode_u32(BerReader(b"\x80"), 1)


def test_decode_u32_five_octets_needs_zero_lead():
    with pytest.raises(Asn1Error):
        decode_u32(BerReader(b"\x01\x00\x00\x00\x00"), 5)


@pytest.mark.parametrize("length", [0, 5])
def test_decode_s32_rejects_bad_length(length):
    with pytest.raises(Asn1Error):
        decode_s32(BerReader(b"\x00" * 8), length)


def test_decode_s32_negative_single_octet():
    assert decode_s32(BerReader(b"\xff"), 1) == -1


def test_decode_truncated_input():
    with pytest.raises(Asn1Error):
        decode_u32(BerReader(b"\x01"), 3)


def test_encode_into_full_writer():
    with pytest.raises(Asn1Error):
        _enc(encode_u32, u32_octets(0xFFFFFFFF), 0xFFFFFFFF, capacity=2)