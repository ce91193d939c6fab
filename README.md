# lwsnmp

`lwsnmp` is a small SNMP agent core with no dependencies. It gives you the pieces an agent uses to answer GET and GET-NEXT, and each piece can also be used on its own:

- **BER codec.**
  - `lwsnmp.asn1_tlv` handles TLV headers.
  - `lwsnmp.asn1_int` handles signed 32-bit, unsigned 32-bit and Counter64 integers.
  - `lwsnmp.asn1_oid` handles object identifiers and raw octet strings.
- **OID helpers** in `lwsnmp.oid`. They compare OIDs and check an OID against per-position ranges. They also convert the BITS pseudotype and TruthValue values.
- **A next-OID search state** in `lwsnmp.nextoid`. `NextOidState` keeps track of the closest OID that follows a starting point.
- **Inet address indexes** in `lwsnmp.inet`. They convert IPv4 and IPv6 addresses, with or without a port, to InetAddressType + InetAddress OID indexes and back.
- **A MIB tree** in `lwsnmp.mib`.
  - Node types: `TreeNode`, `ScalarNode`, `ScalarArrayNode` and `TableNode`.
  - `resolve_exact` and `resolve_next` walk the tree.
- **A MIB registry** in `lwsnmp.registry`. `MibRegistry` finds the MIB that owns an OID and walks across several MIBs for GET-NEXT.
- **MIB-II groups** (`lwsnmp.mib2`). They are built against an in-memory model of a network stack (`lwsnmp.stack`). The groups are:
  - interfaces: ifNumber and ifTable
  - at: atTable
  - ip: the scalars, ipAddrTable, ipRouteTable and ipNetToMediaTable
  - icmp

## Installation

```
pip install lwsnmp
```

You need Python 3.10 or later.

## Encoding and decoding

```python
from lwsnmp.asn1_tlv import BerWriter, BerReader, Tlv, encode_tlv, decode_tlv
from lwsnmp.asn1_int import s32_octets, encode_s32, decode_s32

writer = BerWriter()
length = s32_octets(-129)                       # 2
encode_tlv(writer, Tlv(type=0x02, value_len=length))
encode_s32(writer, length, -129)
data = writer.getvalue()                         # b"\x02\x02\xff\x7f"

reader = BerReader(data)
tlv = decode_tlv(reader)
assert decode_s32(reader, tlv.value_len) == -129
```

Errors are raised as `Asn1Error`. This covers three cases:

- malformed input
- values that cannot be encoded
- running past the end of a `BerReader`, or past the capacity of a `BerWriter(capacity=...)`

## Object identifiers

```python
from lwsnmp.oid import oid_compare, oid_in_range, OidRange
from lwsnmp.asn1_tlv import BerWriter, BerReader
from lwsnmp.asn1_oid import encode_oid, decode_oid

oid_compare((1, 3, 6, 1), (1, 3, 6, 1, 2))           # -1
oid_in_range((10, 0, 0, 1), [OidRange(0, 0xFF)] * 4)  # True

writer = BerWriter()
encode_oid(writer, (1, 3, 6, 1, 2, 1))
data = writer.getvalue()                              # b"\x2b\x06\x01\x02\x01"
decode_oid(BerReader(data), len(data), 128)           # (1, 3, 6, 1, 2, 1)
```

The inet helpers work on `ipaddress` objects or strings. `None` stands for the "any" address type.

```python
from lwsnmp.inet import ip_port_to_oid, oid_to_ip_port

ip_port_to_oid("192.0.2.1", 161)       # (1, 4, 192, 0, 2, 1, 161)
oid_to_ip_port((1, 4, 192, 0, 2, 1, 161))
# (IPv4Address('192.0.2.1'), 161, 7)
```

## Serving MIB-II

To serve MIB-II:

1. Describe your stack with `NetworkStack`, `Netif` and `ArpEntry`.
2. Build the MIB with `build_mib2`.
3. Register it with a `MibRegistry`.

```python
from lwsnmp.stack import NetworkStack, Netif
from lwsnmp.mib2 import build_mib2
from lwsnmp.registry import MibRegistry

stack = NetworkStack()
stack.add_netif(Netif(name="en", ip4="192.0.2.10", netmask="255.255.255.0",
                      gw="192.0.2.1", up=True, link_up=True))

registry = MibRegistry()
registry.set_mibs([build_mib2(stack)])

instance = registry.get_node_instance((1, 3, 6, 1, 2, 1, 2, 1, 0))   # ifNumber.0
instance.get_value(instance)                                         # 1

oid, instance = registry.get_next_node_instance((1, 3, 6, 1, 2, 1, 4), None)
# oid == (1, 3, 6, 1, 2, 1, 4, 1, 0), ipForwarding.0
```

A `NodeInstance` carries the callbacks for one instance:

- `get_value(instance)`
- `set_test(instance, value)`
- `set_value(instance, value)`

The instance also carries its `access` rights and its ASN.1 type. Among the MIB-II objects only these are writable:

- ipForwarding and ipDefaultTTL. They accept only their current value.
- ifAdminStatus. It brings an interface up (1) or down (2).

A lookup that finds nothing raises `SnmpError`. Its `status` is one of the following `ErrorStatus` values:

- `NO_SUCH_OBJECT`
- `NO_SUCH_INSTANCE`
- `END_OF_MIB_VIEW`

A rejected set raises `SnmpError` with `WRONG_VALUE`.

`get_next_node_instance` takes an optional validator. It is called with each candidate instance and returns `True` to accept it. Rejected instances are skipped.

## What the package does not do

- It has no network side. It does not receive or send UDP datagrams, and it does not parse or build whole SNMP messages or PDUs.
- It does not handle community strings, SNMPv3 security or traps.
- The MIB-II tree covers only the interfaces, at, ip and icmp groups. There are no system, tcp, udp or snmp groups.
- The stack it reports on is the in-memory `NetworkStack` model. The package does not read the statistics of the host it runs on.

## Running the tests

```
pip install "lwsnmp[test]"
pytest
```