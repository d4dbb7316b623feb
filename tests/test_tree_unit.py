from core import TreeRecord, index_of, materialize, record_for

CHILDREN = {1: [2, 3], 2: [4], 3: [], 4: [], 5: [6], 6: []}


def _children(handle):
    return CHILDREN[handle]


def test_only_roots_when_nothing_opened():
    tree = materialize([1, 5], _children, set())
    assert [r.handle for r in tree] == [1, 5]
    assert all(r.depth == 0 and r.parent is None for r in tree)


def test_opened_nodes_expand_in_preorder():
    tree = materialize([1, 5], _children, {1, 2})
    assert tree == [
        TreeRecord(1, None, 0),
        TreeRecord(2, 1, 1),
        TreeRecord(4, 2, 2),
        TreeRecord(3, 1, 1),
        TreeRecord(5, None, 0),
    ]


def test_opened_under_collapsed_parent_stays_hidden():
    tree = materialize([1], _children, {2})
    assert [r.handle for r in tree] == [1]


def test_empty_roots():
    assert materialize([], _children, {1}) == []


def test_index_and_record_lookup():
    tree = materialize([1, 5], _children, {5})
    assert index_of(tree, 6) == 2
    assert index_of(tree, 4) is None
    assert index_of(tree, None) is None
    assert record_for(tree, 6) == TreeRecord(6, 5, 1)
    assert record_for(tree, 99) is None
