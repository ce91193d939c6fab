from ipaddress import IPv4Address, IPv6Address

import pytest

from lwsnmp.inet import (
    ip4_to_oid,
    ip6_to_oid,
    ip_port_to_oid,
    ip_to_oid,
    oid_to_ip,
    oid_to_ip4,
    oid_to_ip6,
    oid_to_ip_port,
)


def test_ip4_to_oid_values():
    assert ip4_to_oid(IPv4Address("192.168.1.20")) == (192, 168, 1, 20)


def test_ip4_round_trip():
    ip = IPv4Address("10.0.0.1")
    assert oid_to_ip4(ip4_to_oid(ip)) == ip


def test_oid_to_ip4_rejects_large_subid():
    with pytest.raises(ValueError):
        oid_to_ip4((256, 0, 0, 1))


def test_oid_to_ip4_rejects_short():
    with pytest.raises(ValueError):
        oid_to_ip4((1, 2, 3))


def test_ip6_round_trip():
    ip = IPv6Address("2001:db8::1")
    oid = ip6_to_oid(ip)
    assert len(oid) == 16
    assert oid_to_ip6(oid) == ip


def test_oid_to_ip6_rejects_large_subid():
    with pytest.raises(ValueError):
        oid_to_ip6((0x100,) + (0,) * 15)


def test_any_address():
    assert ip_to_oid(None) == (0, 0)
    assert oid_to_ip((0, 0)) == (None, 2)


@pytest.mark.parametrize("ip", [IPv4Address("192.0.2.7"), IPv6Address("fe80::1234")])
def test_ip_round_trip(ip):
    oid = ip_to_oid(ip)
    address, used = oid_to_ip(oid)
    assert address == ip
    assert used == len(oid)


def test_ip_to_oid_prefixes():
    v4 = ip_to_oid(IPv4Address("192.0.2.7"))
    v6 = ip_to_oid(IPv6Address("fe80::1"))
    assert v4[:2] == (1, 4) and len(v4) == 6
    assert v6[:2] == (2, 16) and len(v6) == 18


@pytest.mark.parametrize(
    "oid",
    [(), (0,), (0, 1), (1, 4, 1, 2, 3), (1, 3, 1, 2, 3, 4), (2, 16, 0), (3, 0), (1, 4, 1, 2, 3, 300)],
)
def test_oid_to_ip_rejects(oid):
    with pytest.raises(ValueError):
        oid_to_ip(oid)


def test_ip_port_round_trip():
    ip = IPv4Address("198.51.100.3")
    oid = ip_port_to_oid(ip, 161)
    assert oid[-1] == 161
    assert oid_to_ip_port(oid) == (ip, 161, len(oid))


def test_ip_port_with_extra_subids():
    oid = ip_port_to_oid(None, 162) + (99,)
    address, port, used = oid_to_ip_port(oid)
    assert (address, port, used) == (None, 162, len(oid) - 1)


def test_ip_port_missing_port():
    with pytest.raises(ValueError):
        oid_to_ip_port(ip_to_oid(IPv4Address("192.0.2.1")))


def test_ip_port_out_of_range():
    with pytest.raises(ValueError):
        oid_to_ip_port((*ip_to_oid(IPv4Address("192.0.2.1")), 0x10000))