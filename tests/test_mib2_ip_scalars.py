import pytest

from lwsnmp.mib import Access, Asn1Type, ErrorStatus, NodeInstance, SnmpError
from lwsnmp.mib2_ip_scalars import build_ip_scalars, ip_set_test, ip_value
from lwsnmp.stack import NetworkStack


def test_forwarding_value():
    stack = NetworkStack(ip_forward=False)
    assert ip_value(stack, 1) == 2
    stack.ip_forward = True
    assert ip_value(stack, 1) == 1


def test_default_ttl():
    stack = NetworkStack(default_ttl=64)
    assert ip_value(stack, 2) == 64


def test_counters_follow_stats():
    stack = NetworkStack()
    stack.stats.ip_in_receives = 42
    stack.stats.ip_frag_creates = 7
    stack.stats.ip_reasm_fails = 3
    assert ip_value(stack, 3) == 42
    assert ip_value(stack, 19) == 7
    assert ip_value(stack, 16) == 3


def test_reasm_timeout():
    stack = NetworkStack(ip_reassembly=True, reass_maxage=30)
    assert ip_value(stack, 13) == 30
    stack.ip_reassembly = False
    assert ip_value(stack, 13) == 0


def test_routing_discards_always_zero():
    assert ip_value(NetworkStack(), 23) == 0


@pytest.mark.parametrize("oid", [0, 20, 21, 22, 24])
def test_unknown_scalar(oid):
    with pytest.raises(SnmpError) as info:
        ip_value(NetworkStack(), oid)
    assert info.value.status is ErrorStatus.NO_SUCH_INSTANCE


@pytest.mark.parametrize(
    "oid, value",
    [(1, 1), (2, 63), (3, 0), (13, 15)],
)
def test_set_test_rejects(oid, value):
    stack = NetworkStack(ip_forward=False, default_ttl=64)
    with pytest.raises(SnmpError) as info:
        ip_set_test(stack, oid, value)
    assert info.value.status is ErrorStatus.WRONG_VALUE


def test_build_scalars_layout():
    nodes = build_ip_scalars(NetworkStack())
    assert [n.oid for n in nodes] == [*range(1, 20), 23]
    access = {n.oid: n.access for n in nodes}
    assert access[1] == Access.READ_WRITE
    assert access[2] == Access.READ_WRITE
    assert all(access[o] == Access.READ_ONLY for o in access if o not in (1, 2))
    types = {n.oid: n.asn1_type for n in nodes}
    assert types[13] == Asn1Type.INTEGER
    assert types[3] == Asn1Type.COUNTER


def test_scalar_instance_reads_stack():
    stack = NetworkStack()
    nodes = {n.oid: n for n in build_ip_scalars(stack)}
    node = nodes[10]
    inst = NodeInstance(node=node, instance_oid=(0,))
    node.get_instance((), inst)
    stack.stats.ip_out_requests = 99
    assert inst.get_value(inst) == 99


def test_scalar_set_through_instance():
    stack = NetworkStack(default_ttl=64)
    node = build_ip_scalars(stack)[1]
    inst = NodeInstance(node=node, instance_oid=(0,))
    node.get_instance((), inst)
    with pytest.raises(SnmpError):
        inst.set_test(inst, 65)
    inst.set_test(inst, 64)
    inst.set_value(inst, 64)
    assert inst.get_value(inst) == 64