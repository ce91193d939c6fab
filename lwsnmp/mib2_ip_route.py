"""MIB-II ipRouteTable (.1.3.6.1.2.1.4.21): a default route plus one route per network."""

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
from .oid import ZERO_DOT_ZERO, OidRange, oid_in_range
from .stack import Netif, NetworkStack

ANY_ADDRESS = IPv4Address(0)

ROUTE_TYPE_DIRECT = 3
ROUTE_TYPE_INDIRECT = 4
ROUTE_PROTO_LOCAL = 2
METRIC_NONE = -1

_ROW_RANGES = (
    OidRange(0, 0xFF),
    OidRange(0, 0xFF),
    OidRange(0, 0xFF),
    OidRange(0, 0xFF),
)

_COLUMNS = (
    TableColumn(1, Asn1Type.IPADDR, Access.READ_ONLY),      # ipRouteDest
    TableColumn(2, Asn1Type.INTEGER, Access.READ_ONLY),     # ipRouteIfIndex
    TableColumn(3, Asn1Type.INTEGER, Access.READ_ONLY),     # ipRouteMetric1
    TableColumn(4, Asn1Type.INTEGER, Access.READ_ONLY),     # ipRouteMetric2
    TableColumn(5, Asn1Type.INTEGER, Access.READ_ONLY),     # ipRouteMetric3
    TableColumn(6, Asn1Type.INTEGER, Access.READ_ONLY),     # ipRouteMetric4
    TableColumn(7, Asn1Type.IPADDR, Access.READ_ONLY),      # ipRouteNextHop
    TableColumn(8, Asn1Type.INTEGER, Access.READ_ONLY),     # ipRouteType
    TableColumn(9, Asn1Type.INTEGER, Access.READ_ONLY),     # ipRouteProto
    TableColumn(10, Asn1Type.INTEGER, Access.READ_ONLY),    # ipRouteAge
    TableColumn(11, Asn1Type.IPADDR, Access.READ_ONLY),     # ipRouteMask
    TableColumn(12, Asn1Type.INTEGER, Access.READ_ONLY),    # ipRouteMetric5
    TableColumn(13, Asn1Type.OBJECT_ID, Access.READ_ONLY),  # ipRouteInfo
)


def route_table_value(
    stack: NetworkStack, netif: Netif, default_route: bool, column: int
) -> Any:
    """Value of one ipRouteTable column for the route through ``netif``."""
    if column == 1:
        return ANY_ADDRESS if default_route else netif.network()
    if column == 2:
        return stack.index_of(netif)
    if column == 3:
        return 1 if default_route else 0
    if column in (4, 5, 6, 12):
        return METRIC_NONE
    if column == 7:
        return IPv4Address(netif.gw if default_route else netif.ip4)
    if column == 8:
        return ROUTE_TYPE_INDIRECT if default_route else ROUTE_TYPE_DIRECT
    if column == 9:
        return ROUTE_PROTO_LOCAL
    if column == 10:
        return 0
    if column == 11:
        return ANY_ADDRESS if default_route else IPv4Address(netif.netmask)
    if column == 13:
        return ZERO_DOT_ZERO
    raise SnmpError(ErrorStatus.NO_SUCH_INSTANCE, f"unknown ipRouteTable column {column}")


def find_route(stack: NetworkStack, ip: IPv4Address | str) -> tuple[Netif, bool]:
    """The interface and default-route flag of the route to destination ``ip``."""
    dest = IPv4Address(ip)
    if dest == ANY_ADDRESS and stack.default_netif is not None:
        return stack.default_netif, True
    for netif in stack.netifs:
        if netif.network() == dest:
            return netif, False
    raise SnmpError(ErrorStatus.NO_SUCH_INSTANCE, f"no route to {dest}")


def build_route_table(stack: NetworkStack) -> TableNode:
    """The ipRouteTable node (node 21 of the ip group) for ``stack``."""

    def get_cell(column: int, row_oid: tuple[int, ...], instance: NodeInstance) -> None:
        if not oid_in_range(row_oid, _ROW_RANGES):
            raise SnmpError(ErrorStatus.NO_SUCH_INSTANCE)
        instance.reference = find_route(stack, oid_to_ip4(row_oid))

    def get_next_cell(
        column: int, row_oid: tuple[int, ...], instance: NodeInstance
    ) -> tuple[int, ...]:
        state = NextOidState(start_oid=row_oid, max_len=len(_ROW_RANGES))
        if stack.default_netif is not None:
            state.check(ip4_to_oid(ANY_ADDRESS), stack.default_netif)
        for netif in stack.netifs:
            network = netif.network()
            if network != ANY_ADDRESS:
                state.check(ip4_to_oid(network), netif)
        if state.status is not NextOidStatus.SUCCESS:
            raise SnmpError(ErrorStatus.NO_SUCH_INSTANCE)
        default_route = oid_to_ip4(state.next_oid) == ANY_ADDRESS
        instance.reference = (state.reference, default_route)
        return state.next_oid

    def get_value(instance: NodeInstance) -> Any:
        netif, default_route = instance.reference
        return route_table_value(stack, netif, default_route, instance.instance_oid[1])

    return TableNode(21, _COLUMNS, get_cell, get_next_cell, get_value)