"""Lightweight SNMP agent core: BER codec, OID helpers, MIB tree and registry, MIB-II groups."""

__version__ = "0.1.0"