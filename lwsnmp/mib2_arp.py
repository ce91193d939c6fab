"""MIB-II ipNetToMediaTable (.1.3.6.1.2.1.4.22) and the at group (.1.3.6.1.2.1.3)."""

from __future__ import annotations

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
    TreeNode,
)
from .nextoid import NextOidState, NextOidStatus
from .oid import OidRange, oid_in_range
from .stack import ArpEntry, NetworkStack

NET_TO_MEDIA_TYPE_DYNAMIC = 3

_ROW_RANGES = (
    OidRange(1, 0xFF),  # ifIndex
    OidRange(0, 0xFF),
    OidRange(0, 0xFF),
    OidRange(0, 0xFF),
    OidRange(0, 0xFF),
)

_NET_TO_MEDIA_COLUMNS = (
    TableColumn(1, Asn1Type.INTEGER, Access.READ_ONLY),       # ipNetToMediaIfIndex
    TableColumn(2, Asn1Type.OCTET_STRING, Access.READ_ONLY),  # ipNetToMediaPhysAddress
    TableColumn(3, Asn1Type.IPADDR, Access.READ_ONLY),        # ipNetToMediaNetAddress
    TableColumn(4, Asn1Type.INTEGER, Access.READ_ONLY),       # ipNetToMediaType
)

# the at table shows the same rows with fewer columns
_AT_COLUMNS = _NET_TO_MEDIA_COLUMNS[:3]


def net_to_media_value(stack: NetworkStack, entry: ArpEntry, column: int) -> Any:
    """Value of one ipNetToMediaTable / atTable column for an ARP entry."""
    if column == 1:
        return stack.index_of(entry.netif)
    if column == 2:
        return entry.hwaddr
    if column == 3:
        return entry.ip
    if column == 4:
        return NET_TO_MEDIA_TYPE_DYNAMIC
    raise SnmpError(ErrorStatus.NO_SUCH_INSTANCE, f"unknown ipNetToMediaTable column {column}")


def _row_oid(stack: NetworkStack, entry: ArpEntry) -> tuple[int, ...] | None:
    if not any(n is entry.netif for n in stack.netifs):
        return None
    return (stack.index_of(entry.netif), *ip4_to_oid(entry.ip))


def _build_table(stack: NetworkStack, oid: int, columns: tuple[TableColumn, ...]) -> TableNode:
    def get_cell(column: int, row_oid: tuple[int, ...], instance: NodeInstance) -> None:
        if not oid_in_range(row_oid, _ROW_RANGES):
            raise SnmpError(ErrorStatus.NO_SUCH_INSTANCE)
        wanted = tuple(row_oid)
        entry = next(
            (e for e in stack.arp_table if _row_oid(stack, e) == wanted), None
        )
        if entry is None:
            raise SnmpError(ErrorStatus.NO_SUCH_INSTANCE)
        # confirm the address part parses as the entry's address
        if oid_to_ip4(wanted[1:]) != entry.ip:
            raise SnmpError(ErrorStatus.NO_SUCH_INSTANCE)
        instance.reference = entry

    def get_next_cell(
        column: int, row_oid: tuple[int, ...], instance: NodeInstance
    ) -> tuple[int, ...]:
        state = NextOidState(start_oid=row_oid, max_len=len(_ROW_RANGES))
        for entry in stack.arp_table:
            candidate = _row_oid(stack, entry)
            if candidate is not None:
                state.check(candidate, entry)
        if state.status is not NextOidStatus.SUCCESS:
            raise SnmpError(ErrorStatus.NO_SUCH_INSTANCE)
        instance.reference = state.reference
        return state.next_oid

    def get_value(instance: NodeInstance) -> Any:
        return net_to_media_value(stack, instance.reference, instance.instance_oid[1])

    return TableNode(oid, columns, get_cell, get_next_cell, get_value)


def build_net_to_media_table(stack: NetworkStack) -> TableNode:
    """The ipNetToMediaTable node (node 22 of the ip group) for ``stack``."""
    return _build_table(stack, 22, _NET_TO_MEDIA_COLUMNS)


def build_at(stack: NetworkStack) -> TreeNode:
    """The at group (node 3 of mib-2) holding atTable for ``stack``."""
    return TreeNode(3, [_build_table(stack, 1, _AT_COLUMNS)])