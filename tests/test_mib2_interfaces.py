import pytest

from lwsnmp.mib import Access, ErrorStatus, NodeInstance, SnmpError
from lwsnmp.mib2_interfaces import (
    admin_status_test,
    build_interfaces,
    interface_count,
    interface_value,
    set_admin_status,
)
from lwsnmp.oid import ZERO_DOT_ZERO
from lwsnmp.stack import Netif, NetworkStack


@pytest.fixture
def stack():
    s = NetworkStack()
    s.add_netif(Netif(name="e0", hwaddr=b"\x02\x00\x00\x00\x00\x01", mtu=1500,
                      link_type=6, link_speed=100, ts=5, up=True, link_up=True))
    s.add_netif(Netif(name="e1", mtu=576, up=True, link_up=False))
    return s


def _nodes(stack):
    tree = build_interfaces(stack)
    return tree, tree.subnodes[0], tree.subnodes[1]


def test_interface_count(stack):
    assert interface_count(stack) == 2
    assert interface_count(NetworkStack()) == 0


def test_basic_columns(stack):
    first, second = stack.netifs
    assert interface_value(stack, first, 1) == stack.index_of(first)
    assert interface_value(stack, second, 1) == stack.index_of(second)
    assert interface_value(stack, first, 2) == b"e0"
    assert interface_value(stack, first, 3) == first.link_type
    assert interface_value(stack, first, 4) == first.mtu
    assert interface_value(stack, first, 5) == first.link_speed
    assert interface_value(stack, first, 6) == first.hwaddr
    assert interface_value(stack, first, 9) == first.ts
    assert interface_value(stack, first, 21) == 0
    assert interface_value(stack, first, 22) == ZERO_DOT_ZERO


def test_status_columns(stack):
    first, second = stack.netifs
    assert interface_value(stack, first, 7) == 1
    assert interface_value(stack, first, 8) == 1
    assert interface_value(stack, second, 8) == 7
    second.up = False
    assert interface_value(stack, second, 7) == 2
    assert interface_value(stack, second, 8) == 2


def test_counter_columns(stack):
    netif = stack.netifs[0]
    netif.counters.in_octets = 11
    netif.counters.out_errors = 22
    assert interface_value(stack, netif, 10) == 11
    assert interface_value(stack, netif, 20) == 22


def test_unknown_column(stack):
    with pytest.raises(SnmpError) as info:
        interface_value(stack, stack.netifs[0], 23)
    assert info.value.status is ErrorStatus.NO_SUCH_INSTANCE


def test_admin_status_test_rejects_other_values():
    with pytest.raises(SnmpError) as info:
        admin_status_test(3)
    assert info.value.status is ErrorStatus.WRONG_VALUE


def test_set_admin_status():
    netif = Netif(up=False)
    set_admin_status(netif, 1)
    assert netif.up is True
    set_admin_status(netif, 2)
    assert netif.up is False
    set_admin_status(netif, 5)
    assert netif.up is False


def test_tree_structure(stack):
    tree, number, table = _nodes(stack)
    assert tree.oid == 2
    assert [n.oid for n in tree.subnodes] == [1, 2]
    inst = NodeInstance(node=number, instance_oid=(0,))
    number.get_instance((), inst)
    assert inst.get_value(inst) == 2
    assert inst.access == Access.READ_ONLY


def test_table_get_instance(stack):
    _, _, table = _nodes(stack)
    index = stack.index_of(stack.netifs[1])
    inst = NodeInstance(node=table, instance_oid=(1, 4, index))
    table.get_instance((), inst)
    assert inst.reference is stack.netifs[1]
    assert inst.get_value(inst) == stack.netifs[1].mtu


def test_table_get_instance_missing_row(stack):
    _, _, table = _nodes(stack)
    for row in ((0,), (200,), (1, 1)):
        inst = NodeInstance(node=table, instance_oid=(1, 1, *row))
        with pytest.raises(SnmpError):
            table.get_instance((), inst)


def test_table_walk(stack):
    _, _, table = _nodes(stack)
    inst = NodeInstance(node=table)
    seen = []
    while True:
        try:
            table.get_next_instance((), inst)
        except SnmpError:
            break
        seen.append(inst.instance_oid)
    indexes = [stack.index_of(n) for n in stack.netifs]
    assert seen[:2] == [(1, 1, indexes[0]), (1, 1, indexes[1])]
    assert seen[2] == (1, 2, indexes[0])
    assert len(seen) == 22 * len(indexes)
    assert seen == sorted(seen)


def test_table_set_admin_status(stack):
    _, _, table = _nodes(stack)
    netif = stack.netifs[0]
    inst = NodeInstance(node=table, instance_oid=(1, 7, stack.index_of(netif)))
    table.get_instance((), inst)
    assert inst.access == Access.READ_WRITE
    with pytest.raises(SnmpError):
        inst.set_test(inst, 9)
    inst.set_test(inst, 2)
    inst.set_value(inst, 2)
    assert netif.up is False
    assert inst.get_value(inst) == 2