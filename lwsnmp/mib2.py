"""The MIB-II tree (.1.3.6.1.2.1) assembled from its groups."""

from __future__ import annotations

from .mib import Mib, TreeNode
from .mib2_arp import build_at, build_net_to_media_table
from .mib2_icmp import build_icmp
from .mib2_interfaces import build_interfaces
from .mib2_ip_addr import build_addr_table
from .mib2_ip_route import build_route_table
from .mib2_ip_scalars import build_ip_scalars
from .stack import NetworkStack

MIB2_BASE_OID: tuple[int, ...] = (1, 3, 6, 1, 2, 1)


def build_ip(stack: NetworkStack) -> TreeNode:
    """The ip group (node 4 of mib-2): scalars plus the address, route and media tables."""
    scalars = build_ip_scalars(stack)
    leading = [n for n in scalars if n.oid < 20]
    trailing = [n for n in scalars if n.oid > 22]
    tables = [
        build_addr_table(stack),
        build_route_table(stack),
        build_net_to_media_table(stack),
    ]
    return TreeNode(4, [*leading, *tables, *trailing])


def build_mib2(stack: NetworkStack) -> Mib:
    """The MIB-II MIB reporting on ``stack``."""
    root = TreeNode(
        1,
        [
            build_interfaces(stack),
            build_at(stack),
            build_ip(stack),
            build_icmp(stack),
        ],
    )
    return Mib(MIB2_BASE_OID, root)