"""MIB tree nodes, node instances and tree resolution."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import IntEnum, IntFlag
from typing import Any

from .asn1_tlv import CONTEXT_VARBIND_END_OF_MIB_VIEW, CONTEXT_VARBIND_NO_SUCH_OBJECT
from .oid import oid_compare

_VARBIND_EXCEPTION_OFFSET = 0xF0


class Asn1Type(IntEnum):
    """ASN.1 tags of the SNMP value types."""

    INTEGER = 0x02
    OCTET_STRING = 0x04
    NULL = 0x05
    OBJECT_ID = 0x06
    IPADDR = 0x40
    COUNTER = 0x41
    GAUGE = 0x42
    TIMETICKS = 0x43
    OPAQUE = 0x44
    COUNTER64 = 0x46


class ErrorStatus(IntEnum):
    """SNMP error statuses plus the varbind exceptions."""

    NO_ERROR = 0
    TOO_BIG = 1
    NO_SUCH_NAME = 2
    BAD_VALUE = 3
    READ_ONLY = 4
    GEN_ERROR = 5
    NO_ACCESS = 6
    WRONG_TYPE = 7
    WRONG_LENGTH = 8
    WRONG_ENCODING = 9
    WRONG_VALUE = 10
    NO_CREATION = 11
    INCONSISTENT_VALUE = 12
    RESOURCE_UNAVAILABLE = 13
    COMMIT_FAILED = 14
    UNDO_FAILED = 15
    AUTHORIZATION_ERROR = 16
    NOT_WRITABLE = 17
    INCONSISTENT_NAME = 18
    NO_SUCH_OBJECT = _VARBIND_EXCEPTION_OFFSET + CONTEXT_VARBIND_NO_SUCH_OBJECT
    NO_SUCH_INSTANCE = _VARBIND_EXCEPTION_OFFSET + 1
    END_OF_MIB_VIEW = _VARBIND_EXCEPTION_OFFSET + CONTEXT_VARBIND_END_OF_MIB_VIEW


class SnmpError(Exception):
    """An SNMP operation failed with ``status``."""

    def __init__(self, status: ErrorStatus | int, message: str | None = None) -> None:
        self.status = ErrorStatus(status)
        super().__init__(message or self.status.name)


class Access(IntFlag):
    """Access rights of a node instance."""

    NOT_ACCESSIBLE = 0
    READ = 1
    WRITE = 2
    READ_ONLY = 1
    WRITE_ONLY = 2
    READ_WRITE = 3


GetValue = Callable[["NodeInstance"], Any]
SetTest = Callable[["NodeInstance", Any], None]
SetValue = Callable[["NodeInstance", Any], None]


@dataclass(eq=False)
class NodeInstance:
    """A resolved instance of a leaf node and the callbacks that access it."""

    node: LeafNode | None = None
    instance_oid: tuple[int, ...] = ()
    asn1_type: int = 0
    access: Access = Access.NOT_ACCESSIBLE
    get_value: GetValue | None = None
    set_test: SetTest | None = None
    set_value: SetValue | None = None
    release_instance: Callable[[NodeInstance], None] | None = None
    reference: Any = None

    def release(self) -> None:
        """Run the release callback once, if there is one."""
        callback, self.release_instance = self.release_instance, None
        if callback is not None:
            callback(self)


class Node:
    """A node of the MIB tree, identified by its sub-identifier."""

    def __init__(self, oid: int) -> None:
        self.oid = oid

    def __repr__(self) -> str:
        return f"{type(self).__name__}(oid={self.oid})"


class TreeNode(Node):
    """An inner node holding sub nodes."""

    def __init__(self, oid: int, subnodes: Sequence[Node] = ()) -> None:
        super().__init__(oid)
        self.subnodes = list(subnodes)

    def _child(self, oid: int) -> Node | None:
        return next((n for n in self.subnodes if n.oid == oid), None)


class LeafNode(Node):
    """A node with instances; behaviour comes from callables or a subclass."""

    def __init__(
        self,
        oid: int,
        get_instance: Callable[[tuple[int, ...], NodeInstance], None] | None = None,
        get_next_instance: Callable[[tuple[int, ...], NodeInstance], None] | None = None,
    ) -> None:
        super().__init__(oid)
        self._get_instance_fn = get_instance
        self._get_next_instance_fn = get_next_instance

    def get_instance(self, oid: Sequence[int], instance: NodeInstance) -> None:
        """Fill ``instance`` for ``instance.instance_oid``; raise SnmpError if absent."""
        if self._get_instance_fn is None:
            raise SnmpError(ErrorStatus.NO_SUCH_INSTANCE)
        self._get_instance_fn(tuple(oid), instance)

    def get_next_instance(self, oid: Sequence[int], instance: NodeInstance) -> None:
        """Advance ``instance.instance_oid`` to the next instance; raise SnmpError if none."""
        if self._get_next_instance_fn is None:
            raise SnmpError(ErrorStatus.NO_SUCH_INSTANCE)
        self._get_next_instance_fn(tuple(oid), instance)


class ScalarNode(LeafNode):
    """A scalar object whose only instance is ``.0``."""

    def __init__(
        self,
        oid: int,
        asn1_type: int,
        access: Access,
        get_value: GetValue | None,
        set_test: SetTest | None = None,
        set_value: SetValue | None = None,
    ) -> None:
        super().__init__(oid)
        self.asn1_type = asn1_type
        self.access = access
        self.get_value = get_value
        self.set_test = set_test
        self.set_value = set_value

    def _fill(self, instance: NodeInstance) -> None:
        instance.asn1_type = self.asn1_type
        instance.access = self.access
        instance.get_value = self.get_value
        instance.set_test = self.set_test
        instance.set_value = self.set_value

    def get_instance(self, oid: Sequence[int], instance: NodeInstance) -> None:
        if tuple(instance.instance_oid) != (0,):
            raise SnmpError(ErrorStatus.NO_SUCH_INSTANCE)
        self._fill(instance)

    def get_next_instance(self, oid: Sequence[int], instance: NodeInstance) -> None:
        if oid_compare(instance.instance_oid, (0,)) >= 0:
            raise SnmpError(ErrorStatus.NO_SUCH_INSTANCE)
        instance.instance_oid = (0,)
        self._fill(instance)


@dataclass(frozen=True)
class ScalarArrayDef:
    """One scalar of a scalar array node."""

    oid: int
    asn1_type: int
    access: Access


class ScalarArrayNode(LeafNode):
    """A group of scalars sharing one set of callbacks, each taking the scalar's definition."""

    def __init__(
        self,
        oid: int,
        defs: Sequence[ScalarArrayDef],
        get_value: Callable[[ScalarArrayDef], Any] | None,
        set_test: Callable[[ScalarArrayDef, Any], None] | None = None,
        set_value: Callable[[ScalarArrayDef, Any], None] | None = None,
    ) -> None:
        super().__init__(oid)
        self.defs = list(defs)
        self._array_get = get_value
        self._array_test = set_test
        self._array_set = set_value

    def _fill(self, instance: NodeInstance, definition: ScalarArrayDef) -> None:
        instance.asn1_type = definition.asn1_type
        instance.access = definition.access
        instance.reference = definition
        getter, tester, setter = self._array_get, self._array_test, self._array_set
        instance.get_value = (lambda inst: getter(inst.reference)) if getter else None
        instance.set_test = (lambda inst, v: tester(inst.reference, v)) if tester else None
        instance.set_value = (lambda inst, v: setter(inst.reference, v)) if setter else None

    def get_instance(self, oid: Sequence[int], instance: NodeInstance) -> None:
        current = tuple(instance.instance_oid)
        if len(current) == 2 and current[1] == 0:
            definition = next((d for d in self.defs if d.oid == current[0]), None)
            if definition is not None:
                self._fill(instance, definition)
                return
        raise SnmpError(ErrorStatus.NO_SUCH_INSTANCE)

    def get_next_instance(self, oid: Sequence[int], instance: NodeInstance) -> None:
        current = tuple(instance.instance_oid)
        result: ScalarArrayDef | None = None
        if not current:
            result = self.defs[0] if self.defs else None
        else:
            requested = current[0]
            if len(current) == 1:
                result = next((d for d in self.defs if d.oid == requested), None)
            if result is None:
                later = [d for d in self.defs if d.oid > requested]
                result = min(later, key=lambda d: d.oid) if later else None
        if result is None:
            raise SnmpError(ErrorStatus.NO_SUCH_INSTANCE)
        instance.instance_oid = (result.oid, 0)
        self._fill(instance, result)


@dataclass(frozen=True)
class TableColumn:
    """One column of a table."""

    index: int
    asn1_type: int
    access: Access


class TableNode(LeafNode):
    """A conceptual table; instances are ``1.<column>.<row index...>``.

    ``get_cell(column, row_oid, instance)`` locates a row (storing whatever it needs in
    ``instance.reference``) and ``get_next_cell(column, row_oid, instance)`` returns the
    row index following ``row_oid``; both raise SnmpError when there is no such row.
    """

    def __init__(
        self,
        oid: int,
        columns: Sequence[TableColumn],
        get_cell: Callable[[int, tuple[int, ...], NodeInstance], None],
        get_next_cell: Callable[[int, tuple[int, ...], NodeInstance], Sequence[int]],
        get_value: GetValue | None,
        set_test: SetTest | None = None,
        set_value: SetValue | None = None,
    ) -> None:
        super().__init__(oid)
        self.columns = list(columns)
        self._get_cell = get_cell
        self._get_next_cell = get_next_cell
        self.get_value = get_value
        self.set_test = set_test
        self.set_value = set_value

    def _fill(self, instance: NodeInstance, column: TableColumn) -> None:
        instance.asn1_type = column.asn1_type
        instance.access = column.access
        instance.get_value = self.get_value
        instance.set_test = self.set_test
        instance.set_value = self.set_value

    def get_instance(self, oid: Sequence[int], instance: NodeInstance) -> None:
        current = tuple(instance.instance_oid)
        if len(current) >= 3 and current[0] == 1:
            column = next((c for c in self.columns if c.index == current[1]), None)
            if column is not None:
                self._fill(instance, column)
                self._get_cell(column.index, current[2:], instance)
                return
        raise SnmpError(ErrorStatus.NO_SUCH_INSTANCE)

    def get_next_instance(self, oid: Sequence[int], instance: NodeInstance) -> None:
        current = tuple(instance.instance_oid)
        if current and current[0] > 1:
            raise SnmpError(ErrorStatus.NO_SUCH_INSTANCE)
        wanted = current[1] if len(current) > 1 else 0
        row: tuple[int, ...] = current[2:]
        while True:
            candidates = [c for c in self.columns if c.index >= wanted]
            if not candidates:
                raise SnmpError(ErrorStatus.NO_SUCH_INSTANCE)
            column = min(candidates, key=lambda c: c.index)
            self._fill(instance, column)
            try:
                row = tuple(self._get_next_cell(column.index, row, instance))
                break
            except SnmpError:
                # start with the first row of the following column
                row = ()
                wanted = column.index + 1
        instance.instance_oid = (1, column.index, *row)


@dataclass(eq=False)
class Mib:
    """A MIB: a tree of nodes rooted at ``base_oid``."""

    base_oid: tuple[int, ...]
    root_node: Node

    def __post_init__(self) -> None:
        self.base_oid = tuple(self.base_oid)


def resolve_exact(mib: Mib, oid: Sequence[int]) -> tuple[LeafNode, int] | None:
    """Find the leaf node ``oid`` points into; return it with the instance part's length."""
    target = tuple(oid)
    node = mib.root_node
    offset = len(mib.base_oid)
    while offset < len(target) and isinstance(node, TreeNode):
        child = node._child(target[offset])
        if child is None:
            return None
        node = child
        offset += 1
    if isinstance(node, TreeNode):
        return None
    return node, len(target) - offset


def resolve_next(mib: Mib, oid: Sequence[int]) -> tuple[LeafNode, tuple[int, ...]] | None:
    """Find the first leaf node after ``oid``; return it with its full OID."""
    target = tuple(oid)
    root = mib.root_node
    if not isinstance(root, TreeNode):
        # a MIB consisting of a single leaf has no other node to go to
        return None

    stack: list[TreeNode] = [root]
    offset = len(mib.base_oid)
    while offset < len(target):
        child = stack[-1]._child(target[offset])
        if not isinstance(child, TreeNode):
            break
        stack.append(child)
        offset += 1

    wanted = 0 if offset >= len(target) else target[offset] + 1

    while stack:
        following = [n for n in stack[-1].subnodes if n.oid >= wanted]
        if not following:
            wanted = stack.pop().oid + 1
            continue
        subnode = min(following, key=lambda n: n.oid)
        if isinstance(subnode, TreeNode):
            stack.append(subnode)
            wanted = 0
        else:
            path = tuple(n.oid for n in stack[1:])
            return subnode, (*mib.base_oid, *path, subnode.oid)
    return None