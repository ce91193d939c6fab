"""MIB-II icmp group (.1.3.6.1.2.1.5)."""

from __future__ import annotations

from .mib import (
    Access,
    Asn1Type,
    ErrorStatus,
    ScalarArrayDef,
    ScalarArrayNode,
    SnmpError,
)
from .stack import Mib2Stats, NetworkStack

_STAT_FIELDS = {
    1: "icmp_in_msgs",
    2: "icmp_in_errors",
    3: "icmp_in_dest_unreachs",
    4: "icmp_in_time_excds",
    5: "icmp_in_parm_probs",
    6: "icmp_in_src_quenchs",
    7: "icmp_in_redirects",
    8: "icmp_in_echos",
    9: "icmp_in_echo_reps",
    10: "icmp_in_timestamps",
    11: "icmp_in_timestamp_reps",
    12: "icmp_in_addr_masks",
    13: "icmp_in_addr_mask_reps",
    14: "icmp_out_msgs",
    15: "icmp_out_errors",
    16: "icmp_out_dest_unreachs",
    17: "icmp_out_time_excds",
    21: "icmp_out_echos",
    22: "icmp_out_echo_reps",
}

# counters the stack does not keep; always reported as zero
_UNSUPPORTED = frozenset({18, 19, 20, 23, 24, 25, 26})

_DEFS = tuple(
    ScalarArrayDef(oid, Asn1Type.COUNTER, Access.READ_ONLY) for oid in range(1, 27)
)


def icmp_value(stats: Mib2Stats, oid: int) -> int:
    """Value of the icmp counter with sub-identifier ``oid``."""
    if oid in _STAT_FIELDS:
        return getattr(stats, _STAT_FIELDS[oid])
    if oid in _UNSUPPORTED:
        return 0
    raise SnmpError(ErrorStatus.NO_SUCH_INSTANCE, f"unknown icmp object {oid}")


def build_icmp(stack: NetworkStack) -> ScalarArrayNode:
    """The icmp group node (node 5 of mib-2) for ``stack``."""

    def get_value(definition: ScalarArrayDef) -> int:
        return icmp_value(stack.stats, definition.oid)

    return ScalarArrayNode(5, _DEFS, get_value)