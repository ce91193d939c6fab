"""MIB-II interfaces group (.1.3.6.1.2.1.2): ifNumber and ifTable."""

from __future__ import annotations

from typing import Any

from .mib import (
    Access,
    Asn1Type,
    ErrorStatus,
    NodeInstance,
    ScalarNode,
    SnmpError,
    TableColumn,
    TableNode,
    TreeNode,
)
from .nextoid import NextOidState, NextOidStatus
from .oid import ZERO_DOT_ZERO, OidRange, oid_in_range
from .stack import Netif, NetworkStack

IF_OUT_QLEN = 0

IF_ADMIN_STATUS_UP = 1
IF_ADMIN_STATUS_DOWN = 2

IF_OPER_STATUS_UP = 1
IF_OPER_STATUS_DOWN = 2
IF_OPER_STATUS_LOWER_LAYER_DOWN = 7

_ROW_RANGES = (OidRange(1, 0xFF),)

_COLUMNS = (
    TableColumn(1, Asn1Type.INTEGER, Access.READ_ONLY),        # ifIndex
    TableColumn(2, Asn1Type.OCTET_STRING, Access.READ_ONLY),   # ifDescr
    TableColumn(3, Asn1Type.INTEGER, Access.READ_ONLY),        # ifType
    TableColumn(4, Asn1Type.INTEGER, Access.READ_ONLY),        # ifMtu
    TableColumn(5, Asn1Type.GAUGE, Access.READ_ONLY),          # ifSpeed
    TableColumn(6, Asn1Type.OCTET_STRING, Access.READ_ONLY),   # ifPhysAddress
    TableColumn(7, Asn1Type.INTEGER, Access.READ_WRITE),       # ifAdminStatus
    TableColumn(8, Asn1Type.INTEGER, Access.READ_ONLY),        # ifOperStatus
    TableColumn(9, Asn1Type.TIMETICKS, Access.READ_ONLY),      # ifLastChange
    TableColumn(10, Asn1Type.COUNTER, Access.READ_ONLY),       # ifInOctets
    TableColumn(11, Asn1Type.COUNTER, Access.READ_ONLY),       # ifInUcastPkts
    TableColumn(12, Asn1Type.COUNTER, Access.READ_ONLY),       # ifInNUcastPkts
    TableColumn(13, Asn1Type.COUNTER, Access.READ_ONLY),       # ifInDiscards
    TableColumn(14, Asn1Type.COUNTER, Access.READ_ONLY),       # ifInErrors
    TableColumn(15, Asn1Type.COUNTER, Access.READ_ONLY),       # ifInUnknownProtos
    TableColumn(16, Asn1Type.COUNTER, Access.READ_ONLY),       # ifOutOctets
    TableColumn(17, Asn1Type.COUNTER, Access.READ_ONLY),       # ifOutUcastPkts
    TableColumn(18, Asn1Type.COUNTER, Access.READ_ONLY),       # ifOutNUcastPkts
    TableColumn(19, Asn1Type.COUNTER, Access.READ_ONLY),       # ifOutDiscards
    TableColumn(20, Asn1Type.COUNTER, Access.READ_ONLY),       # ifOutErrors
    TableColumn(21, Asn1Type.GAUGE, Access.READ_ONLY),         # ifOutQLen
    TableColumn(22, Asn1Type.OBJECT_ID, Access.READ_ONLY),     # ifSpecific
)

_COUNTER_COLUMNS = {
    10: "in_octets",
    11: "in_ucast_pkts",
    12: "in_nucast_pkts",
    13: "in_discards",
    14: "in_errors",
    15: "in_unknown_protos",
    16: "out_octets",
    17: "out_ucast_pkts",
    18: "out_nucast_pkts",
    19: "out_discards",
    20: "out_errors",
}


def interface_count(stack: NetworkStack) -> int:
    """Value of ifNumber: the number of registered interfaces."""
    return len(stack.netifs)


def interface_value(stack: NetworkStack, netif: Netif, column: int) -> Any:
    """Value of one ifTable column for ``netif``."""
    if column == 1:
        return stack.index_of(netif)
    if column == 2:
        return netif.name.encode()
    if column == 3:
        return netif.link_type
    if column == 4:
        return netif.mtu
    if column == 5:
        return netif.link_speed
    if column == 6:
        return netif.hwaddr
    if column == 7:
        return IF_ADMIN_STATUS_UP if netif.up else IF_ADMIN_STATUS_DOWN
    if column == 8:
        if not netif.up:
            return IF_OPER_STATUS_DOWN
        return IF_OPER_STATUS_UP if netif.link_up else IF_OPER_STATUS_LOWER_LAYER_DOWN
    if column == 9:
        return netif.ts
    if column in _COUNTER_COLUMNS:
        return getattr(netif.counters, _COUNTER_COLUMNS[column])
    if column == 21:
        return IF_OUT_QLEN
    if column == 22:
        # no media specific MIB support
        return ZERO_DOT_ZERO
    raise SnmpError(ErrorStatus.NO_SUCH_INSTANCE, f"unknown ifTable column {column}")


def admin_status_test(value: int) -> None:
    """Accept only up(1) or down(2) for ifAdminStatus."""
    if value not in (IF_ADMIN_STATUS_UP, IF_ADMIN_STATUS_DOWN):
        raise SnmpError(ErrorStatus.WRONG_VALUE, f"invalid ifAdminStatus {value}")


def set_admin_status(netif: Netif, value: int) -> None:
    """Bring ``netif`` up (1) or down (2); other values are ignored."""
    if value == IF_ADMIN_STATUS_UP:
        netif.up = True
    elif value == IF_ADMIN_STATUS_DOWN:
        netif.up = False


def build_interfaces(stack: NetworkStack) -> TreeNode:
    """The interfaces subtree (node 2 of mib-2) for ``stack``."""

    def number_value(instance: NodeInstance) -> int:
        return interface_count(stack)

    def get_cell(column: int, row_oid: tuple[int, ...], instance: NodeInstance) -> None:
        if not oid_in_range(row_oid, _ROW_RANGES):
            raise SnmpError(ErrorStatus.NO_SUCH_INSTANCE)
        netif = stack.netif_by_index(row_oid[0])
        if netif is None:
            raise SnmpError(ErrorStatus.NO_SUCH_INSTANCE)
        instance.reference = netif

    def get_next_cell(
        column: int, row_oid: tuple[int, ...], instance: NodeInstance
    ) -> tuple[int, ...]:
        state = NextOidState(start_oid=row_oid, max_len=len(_ROW_RANGES))
        for netif in stack.netifs:
            state.check((stack.index_of(netif),), netif)
        if state.status is not NextOidStatus.SUCCESS:
            raise SnmpError(ErrorStatus.NO_SUCH_INSTANCE)
        instance.reference = state.reference
        return state.next_oid

    def table_value(instance: NodeInstance) -> Any:
        return interface_value(stack, instance.reference, instance.instance_oid[1])

    def table_set_test(instance: NodeInstance, value: int) -> None:
        admin_status_test(value)

    def table_set_value(instance: NodeInstance, value: int) -> None:
        set_admin_status(instance.reference, value)

    number = ScalarNode(1, Asn1Type.INTEGER, Access.READ_ONLY, number_value)
    table = TableNode(
        2,
        _COLUMNS,
        get_cell,
        get_next_cell,
        table_value,
        table_set_test,
        table_set_value,
    )
    return TreeNode(2, [number, table])