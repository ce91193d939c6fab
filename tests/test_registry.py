import pytest

from lwsnmp.mib import Access, Asn1Type, ErrorStatus, Mib, ScalarNode, SnmpError, TreeNode
from lwsnmp.registry import DEFAULT_ENTERPRISE_OID, MibRegistry


def scalar(oid, value):
    return ScalarNode(oid, Asn1Type.INTEGER, Access.READ_ONLY, lambda inst: value)


@pytest.fixture
def outer():
    return Mib((1, 3), TreeNode(3, [scalar(1, "a"), scalar(5, "b")]))


@pytest.fixture
def inner():
    return Mib((1, 3, 3), TreeNode(3, [scalar(1, "inner")]))


@pytest.fixture
def other():
    return Mib((2, 1), TreeNode(1, [scalar(4, "other")]))


def test_set_mibs_requires_one():
    reg = MibRegistry()
    with pytest.raises(ValueError):
        reg.set_mibs([])


def test_enterprise_oid(outer):
    reg = MibRegistry([outer])
    assert reg.device_enterprise_oid == DEFAULT_ENTERPRISE_OID
    reg.set_device_enterprise_oid((1, 3, 6, 1, 4, 1, 99999, 1))
    assert reg.device_enterprise_oid == (1, 3, 6, 1, 4, 1, 99999, 1)
    reg.set_device_enterprise_oid(None)
    assert reg.device_enterprise_oid == DEFAULT_ENTERPRISE_OID


def test_mib_from_oid_longest_prefix(outer, inner):
    reg = MibRegistry([outer, inner])
    assert reg.mib_from_oid((1, 3, 3, 1, 0)) is inner
    assert reg.mib_from_oid((1, 3, 5, 0)) is outer
    assert reg.mib_from_oid((1, 4)) is None
    assert reg.mib_from_oid(()) is None


def test_next_mib_and_between(outer, inner, other):
    reg = MibRegistry([other, outer, inner])
    assert reg.next_mib((1, 2)) is outer
    assert reg.next_mib((1, 3, 1)) is inner
    assert reg.next_mib((3,)) is None
    assert reg.mib_between((1, 3, 1), (1, 3, 5)) is inner
    assert reg.mib_between((1, 3, 1), (1, 3, 2)) is None


def test_get_node_instance(outer):
    reg = MibRegistry([outer])
    inst = reg.get_node_instance((1, 3, 5, 0))
    assert inst.get_value(inst) == "b"
    assert inst.instance_oid == (0,)


def test_get_node_instance_errors(outer):
    reg = MibRegistry([outer])
    with pytest.raises(SnmpError) as exc:
        reg.get_node_instance((1, 3, 2, 0))
    assert exc.value.status is ErrorStatus.NO_SUCH_OBJECT
    with pytest.raises(SnmpError) as exc:
        reg.get_node_instance((1, 3, 5, 1))
    assert exc.value.status is ErrorStatus.NO_SUCH_INSTANCE


def test_get_next_walks_across_mibs(outer, other):
    reg = MibRegistry([outer, other])
    oid, inst = reg.get_next_node_instance((1, 3))
    assert oid == (1, 3, 1, 0)
    assert inst.get_value(inst) == "a"
    oid, inst = reg.get_next_node_instance(oid)
    assert oid == (1, 3, 5, 0)
    oid, inst = reg.get_next_node_instance(oid)
    assert oid == (2, 1, 4, 0)
    assert inst.get_value(inst) == "other"
    with pytest.raises(SnmpError) as exc:
        reg.get_next_node_instance(oid)
    assert exc.value.status is ErrorStatus.END_OF_MIB_VIEW


def test_get_next_before_any_mib(outer):
    reg = MibRegistry([outer])
    oid, _ = reg.get_next_node_instance((0, 9))
    assert oid == (1, 3, 1, 0)


def test_get_next_enters_and_leaves_inner_mib(outer, inner):
    reg = MibRegistry([outer, inner])
    oid, inst = reg.get_next_node_instance((1, 3, 1, 0))
    assert oid == (1, 3, 3, 1, 0)
    assert inst.get_value(inst) == "inner"
    oid, inst = reg.get_next_node_instance(oid)
    assert oid == (1, 3, 5, 0)


def test_validate_skips_rejected(outer):
    reg = MibRegistry([outer])
    oid, inst = reg.get_next_node_instance(
        (1, 3), validate=lambda i: i.get_value(i) != "a"
    )
    assert oid == (1, 3, 5, 0)
    assert inst.get_value(inst) == "b"