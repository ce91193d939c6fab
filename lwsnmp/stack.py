"""A model of the network stack state that MIB-II reports on."""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from ipaddress import IPv4Address

_MAX_NETIF_NUM = 255


@dataclass
class Mib2Stats:
    """Protocol counters kept by the stack."""

    ip_in_receives: int = 0
    ip_in_hdr_errors: int = 0
    ip_in_addr_errors: int = 0
    ip_forw_datagrams: int = 0
    ip_in_unknown_protos: int = 0
    ip_in_discards: int = 0
    ip_in_delivers: int = 0
    ip_out_requests: int = 0
    ip_out_discards: int = 0
    ip_out_no_routes: int = 0
    ip_reasm_reqds: int = 0
    ip_reasm_oks: int = 0
    ip_reasm_fails: int = 0
    ip_frag_oks: int = 0
    ip_frag_fails: int = 0
    ip_frag_creates: int = 0
    icmp_in_msgs: int = 0
    icmp_in_errors: int = 0
    icmp_in_dest_unreachs: int = 0
    icmp_in_time_excds: int = 0
    icmp_in_parm_probs: int = 0
    icmp_in_src_quenchs: int = 0
    icmp_in_redirects: int = 0
    icmp_in_echos: int = 0
    icmp_in_echo_reps: int = 0
    icmp_in_timestamps: int = 0
    icmp_in_timestamp_reps: int = 0
    icmp_in_addr_masks: int = 0
    icmp_in_addr_mask_reps: int = 0
    icmp_out_msgs: int = 0
    icmp_out_errors: int = 0
    icmp_out_dest_unreachs: int = 0
    icmp_out_time_excds: int = 0
    icmp_out_echos: int = 0
    icmp_out_echo_reps: int = 0


@dataclass
class NetifCounters:
    """Per-interface traffic counters."""

    in_octets: int = 0
    in_ucast_pkts: int = 0
    in_nucast_pkts: int = 0
    in_discards: int = 0
    in_errors: int = 0
    in_unknown_protos: int = 0
    out_octets: int = 0
    out_ucast_pkts: int = 0
    out_nucast_pkts: int = 0
    out_discards: int = 0
    out_errors: int = 0


@dataclass(eq=False)
class Netif:
    """A network interface."""

    name: str = "en"
    hwaddr: bytes = bytes(6)
    mtu: int = 0
    link_type: int = 0
    link_speed: int = 0
    ts: int = 0
    up: bool = False
    link_up: bool = False
    ip4: IPv4Address = field(default_factory=lambda: IPv4Address(0))
    netmask: IPv4Address = field(default_factory=lambda: IPv4Address(0))
    gw: IPv4Address = field(default_factory=lambda: IPv4Address(0))
    counters: NetifCounters = field(default_factory=NetifCounters)
    num: int | None = None

    def __post_init__(self) -> None:
        self.ip4 = IPv4Address(self.ip4)
        self.netmask = IPv4Address(self.netmask)
        self.gw = IPv4Address(self.gw)
        self.hwaddr = bytes(self.hwaddr)

    def network(self) -> IPv4Address:
        """The network address: the interface address masked with its netmask."""
        return IPv4Address(int(self.ip4) & int(self.netmask))


@dataclass(eq=False)
class ArpEntry:
    """A resolved entry of the ARP cache."""

    ip: IPv4Address
    netif: Netif
    hwaddr: bytes

    def __post_init__(self) -> None:
        self.ip = IPv4Address(self.ip)
        self.hwaddr = bytes(self.hwaddr)


@dataclass(eq=False)
class NetworkStack:
    """Interfaces, ARP cache, counters and IP settings of one stack."""

    netifs: list[Netif] = field(default_factory=list)
    default_netif: Netif | None = None
    arp_table: list[ArpEntry] = field(default_factory=list)
    stats: Mib2Stats = field(default_factory=Mib2Stats)
    ip_forward: bool = False
    default_ttl: int = 255
    ip_reassembly: bool = True
    reass_maxage: int = 15
    reass_max_pbufs: int = 10
    pbuf_pool_bufsize: int = 592
    link_hlen: int = 14
    link_encapsulation_hlen: int = 0
    _next_num: int = field(default=0, init=False, repr=False)

    def add_netif(self, netif: Netif) -> int:
        """Register ``netif``, giving it a free interface number; return its index."""
        if any(n is netif for n in self.netifs):
            raise ValueError("interface already added")
        used = {n.num for n in self.netifs}
        if netif.num is None or netif.num in used or not 0 <= netif.num < _MAX_NETIF_NUM:
            candidates = itertools.chain(
                range(self._next_num, _MAX_NETIF_NUM), range(0, self._next_num)
            )
            num = next((c for c in candidates if c not in used), None)
            if num is None:
                raise ValueError("no free interface number")
            netif.num = num
        self._next_num = (netif.num + 1) % _MAX_NETIF_NUM
        self.netifs.append(netif)
        return self.index_of(netif)

    def netif_by_index(self, index: int) -> Netif | None:
        """The interface with interface index ``index``, or None."""
        return next((n for n in self.netifs if n.num is not None and n.num + 1 == index), None)

    def index_of(self, netif: Netif) -> int:
        """Interface index of a registered interface (its number plus one)."""
        if not any(n is netif for n in self.netifs) or netif.num is None:
            raise ValueError("interface not registered")
        return netif.num + 1