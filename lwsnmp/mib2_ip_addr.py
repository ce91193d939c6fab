"""MIB-II ipAddrTable (.1.3.6.1.2.1.4.20)."""

from __future__ import annotations

from ipaddress import IPv4Address
from typing import Any

from .inet import ip4_to_oid, oid_to_ip4
from .mib import (
    Access,
    Asn1Type,
    ErrorStatus,
    NodeInstance,
    SnmpError,
    TableColumn,
    TableNode,
)
from .nextoid import NextOidState, NextOidStatus
from .oid import OidRange, oid_in_range
from .stack import Netif, NetworkStack

IP_HLEN = 20

# there is no broadcast address kept per interface; the source reports this fixed value
BCAST_ADDR_VALUE = 0xFFFFFFFF & 1

_ROW_RANGES = (
    OidRange(0, 0xFF),
    OidRange(0, 0xFF),
    OidRange(0, 0xFF),
    OidRange(0, 0xFF),
)

_COLUMNS = (
    TableColumn(1, Asn1Type.IPADDR, Access.READ_ONLY),    # ipAdEntAddr
    TableColumn(2, Asn1Type.INTEGER, Access.READ_ONLY),   # ipAdEntIfIndex
    TableColumn(3, Asn1Type.IPADDR, Access.READ_ONLY),    # ipAdEntNetMask
    TableColumn(4, Asn1Type.INTEGER, Access.READ_ONLY),   # ipAdEntBcastAddr
    TableColumn(5, Asn1Type.INTEGER, Access.READ_ONLY),   # ipAdEntReasmMaxSize
)


def _reasm_max_size(stack: NetworkStack) -> int:
    if not stack.ip_reassembly:
        return 0
    # calculated for two simultaneous fragmented packets
    payload = (
        stack.pbuf_pool_bufsize
        - stack.link_encapsulation_hlen
        - stack.link_hlen
        - IP_HLEN
    )
    return IP_HLEN + (stack.reass_max_pbufs // 2) * payload


def addr_table_value(stack: NetworkStack, netif: Netif, column: int) -> Any:
    """Value of one ipAddrTable column for ``netif``."""
    if column == 1:
        return IPv4Address(netif.ip4)
    if column == 2:
        return stack.index_of(netif)
    if column == 3:
        return IPv4Address(netif.netmask)
    if column == 4:
        return BCAST_ADDR_VALUE
    if column == 5:
        return _reasm_max_size(stack)
    raise SnmpError(ErrorStatus.NO_SUCH_INSTANCE, f"unknown ipAddrTable column {column}")


def build_addr_table(stack: NetworkStack) -> TableNode:
    """The ipAddrTable node (node 20 of the ip group) for ``stack``."""

    def get_cell(column: int, row_oid: tuple[int, ...], instance: NodeInstance) -> None:
        if not oid_in_range(row_oid, _ROW_RANGES):
            raise SnmpError(ErrorStatus.NO_SUCH_INSTANCE)
        wanted = oid_to_ip4(row_oid)
        netif = next((n for n in stack.netifs if n.ip4 == wanted), None)
        if netif is None:
            raise SnmpError(ErrorStatus.NO_SUCH_INSTANCE)
        instance.reference = netif

    def get_next_cell(
        column: int, row_oid: tuple[int, ...], instance: NodeInstance
    ) -> tuple[int, ...]:
        state = NextOidState(start_oid=row_oid, max_len=len(_ROW_RANGES))
        for netif in stack.netifs:
            state.check(ip4_to_oid(netif.ip4), netif)
        if state.status is not NextOidStatus.SUCCESS:
            raise SnmpError(ErrorStatus.NO_SUCH_INSTANCE)
        instance.reference = state.reference
        return state.next_oid

    def get_value(instance: NodeInstance) -> Any:
        return addr_table_value(stack, instance.reference, instance.instance_oid[1])

    return TableNode(20, _COLUMNS, get_cell, get_next_cell, get_value)