import pytest

from paxi.ident import ID, new_id


def test_new_id_format():
    assert new_id(2, 1) == "2.1"


@pytest.mark.parametrize("zone, node", [(0, 0), (1, 1), (3, 7), (12, 40)])
def test_new_id_round_trip(zone, node):
    ident = new_id(zone, node)
    assert ident.zone() == zone
    assert ident.node() == node


def test_new_id_drops_sign():
    assert new_id(-3, -7) == new_id(3, 7)


def test_id_without_dot_is_bare_node():
    ident = ID("5")
    assert ident.zone() == 0
    assert ident.node() == 5


@pytest.mark.parametrize("text", ["a.b", "-1.-2", "+1.+2", " 1. 2"])
def test_malformed_parts_read_as_zero(text):
    ident = ID(text)
    assert ident.zone() == 0
    assert ident.node() == 0


def test_empty_id_reads_as_zero():
    assert ID("").sort_key() == (0, 0)


def test_extra_parts_are_ignored():
    ident = ID("4.9.11")
    assert (ident.zone(), ident.node()) == (4, 9)


def test_sort_by_zone_then_node():
    ids = [ID("2.1"), ID("1.10"), ID("1.3"), ID("1.2")]
    assert sorted(ids, key=ID.sort_key) == ["1.2", "1.3", "1.10", "2.1"]


def test_id_is_a_string():
    ident = new_id(1, 2)
    assert ident == ID("1.2")
    assert {ident: "x"}["1.2"] == "x"