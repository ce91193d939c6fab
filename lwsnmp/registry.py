"""The set of MIBs an agent serves and lookups across them."""

from __future__ import annotations

from collections.abc import Callable, Sequence

from .mib import ErrorStatus, LeafNode, Mib, NodeInstance, SnmpError, resolve_exact, resolve_next
from .oid import oid_compare

# the private-enterprises branch; devices are expected to register below it
DEFAULT_ENTERPRISE_OID: tuple[int, ...] = (1, 3, 6, 1, 4, 1)

Validator = Callable[[NodeInstance], bool]


def _reset(instance: NodeInstance) -> None:
    instance.asn1_type = 0
    instance.access = type(instance.access)(0)
    instance.get_value = None
    instance.set_test = None
    instance.set_value = None
    instance.release_instance = None
    instance.reference = None


class MibRegistry:
    """Holds the MIBs in use and resolves object identifiers against them."""

    def __init__(
        self,
        mibs: Sequence[Mib] = (),
        default_enterprise_oid: Sequence[int] = DEFAULT_ENTERPRISE_OID,
    ) -> None:
        self.mibs: list[Mib] = list(mibs)
        self._default_enterprise_oid = tuple(default_enterprise_oid)
        self.device_enterprise_oid: tuple[int, ...] = self._default_enterprise_oid

    def set_mibs(self, mibs: Sequence[Mib]) -> None:
        """Replace the MIBs in use; at least one is required."""
        mibs = list(mibs)
        if not mibs:
            raise ValueError("at least one MIB is required")
        self.mibs = mibs

    def set_device_enterprise_oid(self, oid: Sequence[int] | None) -> None:
        """Set the device enterprise OID; ``None`` restores the default."""
        self.device_enterprise_oid = (
            self._default_enterprise_oid if oid is None else tuple(oid)
        )

    def mib_from_oid(self, oid: Sequence[int]) -> Mib | None:
        """The MIB with the longest base OID that is a prefix of ``oid``."""
        target = tuple(oid)
        if not target:
            return None
        matched: Mib | None = None
        for mib in self.mibs:
            base = mib.base_oid
            if len(target) >= len(base) and target[:len(base)] == base:
                if matched is None or len(base) > len(matched.base_oid):
                    matched = mib
        return matched

    def next_mib(self, oid: Sequence[int]) -> Mib | None:
        """The MIB with the smallest base OID sorting after ``oid``."""
        target = tuple(oid)
        if not target:
            return None
        following = [m for m in self.mibs if oid_compare(m.base_oid, target) > 0]
        return min(following, key=lambda m: m.base_oid, default=None)

    def mib_between(self, oid1: Sequence[int], oid2: Sequence[int]) -> Mib | None:
        """The next MIB after ``oid1`` if its base sorts before ``oid2``."""
        if not tuple(oid2):
            raise ValueError("oid2 must not be empty")
        candidate = self.next_mib(oid1)
        if candidate is not None and oid_compare(candidate.base_oid, oid2) < 0:
            return candidate
        return None

    def get_node_instance(self, oid: Sequence[int]) -> NodeInstance:
        """Resolve the instance ``oid`` names; raise SnmpError if there is none."""
        target = tuple(oid)
        mib = self.mib_from_oid(target)
        if mib is None:
            raise SnmpError(ErrorStatus.NO_SUCH_OBJECT)
        found = resolve_exact(mib, target)
        if found is None:
            raise SnmpError(ErrorStatus.NO_SUCH_OBJECT)
        node, instance_len = found
        split = len(target) - instance_len
        instance = NodeInstance(node=node, instance_oid=target[split:])
        node.get_instance(target[:split], instance)
        return instance

    def get_next_node_instance(
        self, oid: Sequence[int], validate: Validator | None = None
    ) -> tuple[tuple[int, ...], NodeInstance]:
        """Find the first instance after ``oid`` accepted by ``validate``.

        Returns the instance's full OID and the instance; raises SnmpError with
        END_OF_MIB_VIEW when there is none.
        """
        target = tuple(oid)
        mib = self.mib_from_oid(target)
        if mib is None:
            mib = self.next_mib(target)
            start = mib.base_oid if mib is not None else ()
        else:
            start = target

        instance = NodeInstance()
        node: LeafNode | None = None
        node_oid: tuple[int, ...] = ()

        while mib is not None and node is None:
            exact = resolve_exact(mib, start)
            if exact is not None:
                node, instance_len = exact
                split = len(start) - instance_len
                node_oid = start[:split]
                instance.instance_oid = start[split:]
            else:
                following = resolve_next(mib, start)
                node, node_oid = following if following is not None else (None, ())
                instance.instance_oid = ()

            instance.node = node
            while node is not None:
                _reset(instance)
                try:
                    node.get_next_instance(node_oid, instance)
                except SnmpError:
                    instance.release()
                    following = resolve_next(mib, node_oid)
                    if following is None:
                        node = None
                    else:
                        node, node_oid = following
                        instance.instance_oid = ()
                        instance.node = node
                    continue
                if validate is None or validate(instance):
                    node_oid = (*node_oid, *instance.instance_oid)
                    break
                # rejected: ask the same node for the instance after this one
                instance.release()

            if node is not None:
                # a MIB may sit inside another one, between the start and the result
                intermediate = self.mib_between(start, node_oid)
                if intermediate is not None:
                    instance.release()
                    node = None
                    mib = intermediate
                    start = mib.base_oid
            else:
                next_mib = self.next_mib(start)
                base = mib.base_oid
                if (
                    next_mib is not None
                    and len(next_mib.base_oid) > len(base)
                    and next_mib.base_oid[:len(base)] == base
                ):
                    mib = next_mib
                    start = mib.base_oid
                else:
                    surrounding = self.mib_from_oid(base[:-1]) if len(base) > 1 else None
                    if surrounding is not None:
                        # continue in the surrounding MIB from the current position
                        mib = surrounding
                    else:
                        mib = next_mib
                        if mib is not None:
                            start = mib.base_oid

        if mib is None or node is None:
            raise SnmpError(ErrorStatus.END_OF_MIB_VIEW)
        return node_oid, instance