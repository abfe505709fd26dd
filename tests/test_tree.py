"""Tests tree builder — liste plate → forêt ordonnée + rapport d'invariants."""
import pytest

from funnel_builder.core.schemas import Block
from funnel_builder.core.tree import (
    BlockNode,
    OwnedChildren,
    build_tree,
    collect_issues,
    find_node,
    flatten_tree,
)


def block(id, type="CONTAINER", parent=None, order=0, **kw):
    return Block(id=id, type=type, parent_block_id=parent, order=order, **kw)


def ids(nodes):
    return [n.id for n in nodes]


# ── build_tree ──────────────────────────────────────────────────────────────

def test_empty_list():
    assert build_tree([]) == []


def test_roots_sorted_by_order():
    forest = build_tree([block("b", order=2), block("a", order=0), block("c", order=1)])
    assert ids(forest) == ["a", "c", "b"]


def test_children_sorted_recursively():
    blocks = [
        block("root"),
        block("p2", "PARAGRAPH", "root", 1),
        block("h", "HEADING", "root", 0),
        block("inner", "CARD", "root", 2),
        block("x", "PARAGRAPH", "inner", 5),
        block("y", "PARAGRAPH", "inner", -1),
    ]
    forest = build_tree(blocks)
    root = forest[0]
    assert ids(root.child_nodes) == ["h", "p2", "inner"]
    assert ids(root.child_nodes[2].child_nodes) == ["y", "x"]


def test_input_order_does_not_matter():
    blocks = [
        block("1"),
        block("2", "HEADING", "1", 0),
        block("3", "PARAGRAPH", "1", 1),
    ]
    assert build_tree(blocks) == build_tree(list(reversed(blocks)))


def test_order_ties_keep_input_order():
    blocks = [block("r"), block("b", "PARAGRAPH", "r", 0), block("a", "PARAGRAPH", "r", 0)]
    assert ids(build_tree(blocks)[0].child_nodes) == ["b", "a"]


def test_orphan_promoted_to_root():
    forest = build_tree([block("a"), block("lost", "PARAGRAPH", "missing", 3)])
    assert ids(forest) == ["a", "lost"]


def test_cycle_is_broken_and_every_block_kept():
    blocks = [block("a", parent="b"), block("b", parent="a"), block("c", "PARAGRAPH", "a")]
    forest = build_tree(blocks)
    assert sorted(b.id for b in flatten_tree(forest)) == ["a", "b", "c"]
    assert len(forest) == 1


def test_self_parent_is_promoted():
    forest = build_tree([block("a", parent="a")])
    assert ids(forest) == ["a"]
    assert forest[0].child_nodes == []


def test_duplicate_ids_keep_first():
    forest = build_tree([block("a", order=0), block("a", "HEADING", order=1)])
    assert len(forest) == 1
    assert forest[0].block.type == "CONTAINER"


def test_input_blocks_not_mutated():
    blocks = [block("r"), block("c", "PARAGRAPH", "r")]
    before = [b.model_dump() for b in blocks]
    build_tree(blocks)
    assert [b.model_dump() for b in blocks] == before


def test_nodes_have_owned_children():
    forest = build_tree([block("r"), block("c", "PARAGRAPH", "r")])
    assert isinstance(forest[0].children, OwnedChildren)
    assert forest[0].children.kind == "owned"


def test_flatten_is_pre_order():
    blocks = [
        block("r2", order=1),
        block("r1", order=0),
        block("c1", "PARAGRAPH", "r1", 0),
        block("c2", "PARAGRAPH", "r2", 0),
    ]
    assert [b.id for b in flatten_tree(build_tree(blocks))] == ["r1", "c1", "r2", "c2"]


def test_find_node():
    forest = build_tree([block("r"), block("c", "CARD", "r"), block("g", "PARAGRAPH", "c")])
    node = find_node(forest, "g")
    assert isinstance(node, BlockNode)
    assert node.block.type == "PARAGRAPH"
    assert find_node(forest, "nope") is None


def test_camel_case_input():
    b = Block.model_validate({"id": "x", "type": "HEADING", "parentBlockId": "p", "smartSectionInstanceId": "i"})
    assert b.parent_block_id == "p"
    assert b.smart_section_instance_id == "i"


# ── collect_issues ──────────────────────────────────────────────────────────

def codes(blocks):
    return sorted((i.code, i.block_id) for i in collect_issues(blocks))


def test_valid_tree_has_no_issue():
    blocks = [block("r"), block("h", "HEADING", "r", 0), block("p", "PARAGRAPH", "r", 1)]
    assert collect_issues(blocks) == []


def test_issue_orphan():
    assert codes([block("c", "PARAGRAPH", "missing")]) == [("orphan", "c")]


def test_issue_parent_cannot_have_children():
    blocks = [block("h", "HEADING"), block("p", "PARAGRAPH", "h")]
    assert codes(blocks) == [("parent_cannot_have_children", "p")]


def test_issue_child_not_allowed():
    blocks = [block("f", "FORM"), block("img", "IMAGE", "f")]
    assert codes(blocks) == [("child_not_allowed", "img")]


def test_issue_instance_with_children():
    blocks = [block("i", smart_section_instance_id="inst"), block("p", "PARAGRAPH", "i")]
    assert codes(blocks) == [("instance_with_children", "p")]


def test_issue_duplicate_order():
    blocks = [block("r"), block("a", "PARAGRAPH", "r", 1), block("b", "PARAGRAPH", "r", 1)]
    assert codes(blocks) == [("duplicate_order", "b")]


def test_issue_unknown_type():
    assert codes([block("x", "NOT_A_REAL_TYPE")]) == [("unknown_type", "x")]


def test_issue_cycle():
    blocks = [block("a", parent="b", order=0), block("b", parent="a", order=1)]
    assert "cycle" in {i.code for i in collect_issues(blocks)}


def test_deep_chain_is_built_and_flattened():
    depth  = 1500
    blocks = [block("0")] + [block(str(i), parent=str(i - 1)) for i in reversed(range(1, depth))]
    forest = build_tree(blocks)
    assert ids(forest) == ["0"]
    assert [b.id for b in flatten_tree(forest)] == [str(i) for i in range(depth)]
    assert find_node(forest, str(depth - 1)).block.parent_block_id == str(depth - 2)


def test_numeric_ids_are_read_as_strings():
    b = Block.model_validate({"id": 1, "type": "PARAGRAPH", "parentBlockId": 2, "order": 0})
    assert b.id == "1"
    assert b.parent_block_id == "2"
