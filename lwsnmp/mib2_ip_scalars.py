"""MIB-II ip group scalars (.1.3.6.1.2.1.4.1 - .19 and .23)."""

from __future__ import annotations

from typing import Any

from .mib import Access, Asn1Type, ErrorStatus, NodeInstance, ScalarNode, SnmpError
from .stack import NetworkStack

IP_FORWARDING = 1
IP_NOT_FORWARDING = 2

_STAT_FIELDS = {
    3: "ip_in_receives",
    4: "ip_in_hdr_errors",
    5: "ip_in_addr_errors",
    6: "ip_forw_datagrams",
    7: "ip_in_unknown_protos",
    8: "ip_in_discards",
    9: "ip_in_delivers",
    10: "ip_out_requests",
    11: "ip_out_discards",
    12: "ip_out_no_routes",
    14: "ip_reasm_reqds",
    15: "ip_reasm_oks",
    16: "ip_reasm_fails",
    17: "ip_frag_oks",
    18: "ip_frag_fails",
    19: "ip_frag_creates",
}

_SCALAR_OIDS = (*range(1, 20), 23)
_INTEGER_OIDS = frozenset({1, 2, 13})
_WRITABLE_OIDS = frozenset({1, 2})


def _forwarding(stack: NetworkStack) -> int:
    return IP_FORWARDING if stack.ip_forward else IP_NOT_FORWARDING


def ip_value(stack: NetworkStack, oid: int) -> int:
    """Value of the ip group scalar with sub-identifier ``oid``."""
    if oid == 1:
        return _forwarding(stack)
    if oid == 2:
        return stack.default_ttl
    if oid == 13:
        return stack.reass_maxage if stack.ip_reassembly else 0
    if oid == 23:
        # ipRoutingDiscards is not supported
        return 0
    if oid in _STAT_FIELDS:
        return getattr(stack.stats, _STAT_FIELDS[oid])
    raise SnmpError(ErrorStatus.NO_SUCH_INSTANCE, f"unknown ip scalar {oid}")


def ip_set_test(stack: NetworkStack, oid: int, value: int) -> None:
    """Allow a set only when ``value`` equals the fixed current setting."""
    if oid == 1 and value == _forwarding(stack):
        return
    if oid == 2 and value == stack.default_ttl:
        return
    raise SnmpError(ErrorStatus.WRONG_VALUE, f"cannot set ip scalar {oid} to {value}")


def build_ip_scalars(stack: NetworkStack) -> list[ScalarNode]:
    """Scalar nodes of the ip group, in sub-identifier order."""

    def make(oid: int) -> ScalarNode:
        def get_value(instance: NodeInstance) -> Any:
            return ip_value(stack, oid)

        def set_test(instance: NodeInstance, value: int) -> None:
            ip_set_test(stack, oid, value)

        def set_value(instance: NodeInstance, value: int) -> None:
            # set_test only accepts the current value, so nothing needs storing
            return None

        asn1_type = Asn1Type.INTEGER if oid in _INTEGER_OIDS else Asn1Type.COUNTER
        if oid in _WRITABLE_OIDS:
            return ScalarNode(oid, asn1_type, Access.READ_WRITE, get_value, set_test, set_value)
        return ScalarNode(oid, asn1_type, Access.READ_ONLY, get_value)

    return [make(oid) for oid in _SCALAR_OIDS]