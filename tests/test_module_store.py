from __future__ import annotations

import pytest

from adminhub.core.registry.models import validate_module
from adminhub.core.registry.store import ModuleStore
from tests.helpers.builders import build_module, build_tree


def _node(module_id: str, **kwargs):
    return validate_module(build_module(module_id, **kwargs))


def _tree(module_id: str, child_ids, **kwargs):
    return validate_module(build_tree(module_id, child_ids, **kwargs))


def test_upsert_and_lookup():
    store = ModuleStore()
    store.upsert(_node("alpha"))
    assert store.has("alpha") is True
    assert store.get("alpha").name == "Alpha"
    assert store.get("missing") is None
    assert [m.id for m in store.all_roots()] == ["alpha"]


def test_children_are_references_into_the_store():
    store = ModuleStore()
    store.upsert(_tree("parent", ["c1", "c2"]))
    parent = store.get("parent")
    assert [c.id for c in parent.sub_modules] == ["c1", "c2"]
    assert parent.sub_modules[0] is store.get("c1")
    assert store.parent_of("c1") == "parent"
    assert store.parent_of("parent") is None


def test_all_flat_is_preorder_over_roots():
    store = ModuleStore()
    store.upsert(_tree("a", ["a1", "a2"]))
    store.upsert(_node("b"))
    assert [m.id for m in store.all_flat()] == ["a", "a1", "a2", "b"]
    assert len(store) == 4


def test_replacing_a_root_keeps_its_position():
    store = ModuleStore()
    for mid in ("one", "two", "three"):
        store.upsert(_node(mid))
    store.upsert(_node("two", name="Second"))
    assert [m.id for m in store.all_roots()] == ["one", "two", "three"]
    assert store.get("two").name == "Second"


def test_replacing_a_node_forgets_old_descendants():
    store = ModuleStore()
    store.upsert(_tree("parent", ["old-child"]))
    store.upsert(_tree("parent", ["new-child"]))
    assert store.has("old-child") is False
    assert [c.id for c in store.get("parent").sub_modules] == ["new-child"]


def test_remove_drops_whole_subtree():
    store = ModuleStore()
    nested = build_tree("mid", ["leaf"], route="/admin/top/mid")
    store.upsert(validate_module(build_module("top", sub_modules=[nested])))
    assert store.remove("top") is True
    for mid in ("top", "mid", "leaf"):
        assert store.has(mid) is False
    assert store.all_roots() == []


def test_remove_child_detaches_from_parent():
    store = ModuleStore()
    store.upsert(_tree("parent", ["c1", "c2"]))
    assert store.remove("c1") is True
    assert [c.id for c in store.get("parent").sub_modules] == ["c2"]
    assert store.remove("c2") is True
    assert store.get("parent").sub_modules is None


def test_remove_unknown_returns_false():
    store = ModuleStore()
    assert store.remove("nope") is False


def test_upsert_under_parent_appends_and_replaces_in_place():
    store = ModuleStore()
    store.upsert(_tree("parent", ["c1", "c2"]))
    store.upsert(_node("c3", order=5), parent_id="parent")
    store.upsert(_node("c1", name="Renamed"), parent_id="parent")
    kids = store.get("parent").sub_modules
    assert [c.id for c in kids] == ["c1", "c2", "c3"]
    assert kids[0].name == "Renamed"


def test_upsert_moves_node_between_positions():
    store = ModuleStore()
    store.upsert(_tree("parent", ["child"]))
    store.upsert(_node("child"))
    assert store.get("parent").sub_modules is None
    assert [m.id for m in store.all_roots()] == ["parent", "child"]
    assert store.parent_of("child") is None


def test_upsert_rejects_unknown_parent():
    store = ModuleStore()
    with pytest.raises(KeyError):
        store.upsert(_node("orphan"), parent_id="ghost")
    assert store.has("orphan") is False


def test_upsert_rejects_placing_under_own_descendant():
    store = ModuleStore()
    store.upsert(_tree("parent", ["child"]))
    with pytest.raises(ValueError):
        store.upsert(_node("parent"), parent_id="child")
    assert store.get("child") is store.get("parent").sub_modules[0]


def test_clear_empties_everything():
    store = ModuleStore()
    store.upsert(_tree("parent", ["child"]))
    store.clear()
    assert len(store) == 0
    assert store.all_roots() == []
    assert store.has("child") is False
