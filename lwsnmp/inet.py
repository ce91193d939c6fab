"""Conversions between IP addresses and InetAddressType/InetAddress OID indexes."""

from __future__ import annotations

import ipaddress
from collections.abc import Sequence
from ipaddress import IPv4Address, IPv6Address

Address = IPv4Address | IPv6Address | None

INET_TYPE_ANY = 0
INET_TYPE_IPV4 = 1
INET_TYPE_IPV6 = 2


def _octets(oid: Sequence[int], count: int) -> bytes:
    subs = tuple(oid[:count])
    if len(subs) != count:
        raise ValueError(f"need {count} sub-identifiers, got {len(subs)}")
    if any(not 0 <= s <= 0xFF for s in subs):
        raise ValueError("address sub-identifier out of range")
    return bytes(subs)


def oid_to_ip4(oid: Sequence[int]) -> IPv4Address:
    """Convert four sub-identifiers into an IPv4 address."""
    return IPv4Address(_octets(oid, 4))


def ip4_to_oid(ip: IPv4Address | str) -> tuple[int, ...]:
    """Convert an IPv4 address into four sub-identifiers."""
    return tuple(IPv4Address(ip).packed)


def oid_to_ip6(oid: Sequence[int]) -> IPv6Address:
    """Convert sixteen sub-identifiers into an IPv6 address."""
    return IPv6Address(_octets(oid, 16))


def ip6_to_oid(ip: IPv6Address | str) -> tuple[int, ...]:
    """Convert an IPv6 address into sixteen sub-identifiers."""
    return tuple(IPv6Address(ip).packed)


def ip_to_oid(ip: Address | str) -> tuple[int, ...]:
    """InetAddressType + InetAddress; ``None`` stands for the 'any' address type."""
    if ip is None:
        return (INET_TYPE_ANY, 0)
    address = ip if isinstance(ip, (IPv4Address, IPv6Address)) else ipaddress.ip_address(ip)
    if isinstance(address, IPv6Address):
        return (INET_TYPE_IPV6, 16, *ip6_to_oid(address))
    return (INET_TYPE_IPV4, 4, *ip4_to_oid(address))


def ip_port_to_oid(ip: Address | str, port: int) -> tuple[int, ...]:
    """InetAddressType + InetAddress + InetPortNumber."""
    return (*ip_to_oid(ip), port)


def oid_to_ip(oid: Sequence[int]) -> tuple[Address, int]:
    """Parse InetAddressType + InetAddress; return the address and the number of sub-ids used."""
    if len(oid) < 1:
        raise ValueError("empty address index")
    kind = oid[0]
    if kind == INET_TYPE_ANY:
        if len(oid) < 2 or oid[1] != 0:
            raise ValueError("malformed 'any' address index")
        return None, 2
    if kind == INET_TYPE_IPV4:
        if len(oid) < 6 or oid[1] != 4:
            raise ValueError("malformed IPv4 address index")
        return oid_to_ip4(oid[2:6]), 6
    if kind == INET_TYPE_IPV6:
        if len(oid) < 18 or oid[1] != 16:
            raise ValueError("malformed IPv6 address index")
        return oid_to_ip6(oid[2:18]), 18
    raise ValueError(f"unsupported InetAddressType {kind}")


def oid_to_ip_port(oid: Sequence[int]) -> tuple[Address, int, int]:
    """Parse InetAddressType + InetAddress + InetPortNumber; return address, port and length."""
    address, used = oid_to_ip(oid)
    if len(oid) < used + 1:
        raise ValueError("missing port number")
    port = oid[used]
    if not 0 <= port <= 0xFFFF:
        raise ValueError(f"port {port} out of range")
    return address, port, used + 1