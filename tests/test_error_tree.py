from __future__ import annotations

import pytest

from schemacast.domain.error_tree import ErrorTree


@pytest.mark.schemacast
class TestErrorTree:
    def test_new_tree_is_empty(self):
        tree = ErrorTree()
        assert tree.is_empty()
        assert tree.on("anything") is None
        assert list(tree.report()) == []
        assert len(tree) == 0

    def test_codes_are_deduplicated_in_insertion_order(self):
        tree = ErrorTree(["minimum", "divisibleBy", "minimum"])
        assert tree.codes == ["minimum", "divisibleBy"]

    def test_lookup_by_dotted_path(self):
        tree = ErrorTree()
        tree.child("guests").child(1).child("name").add("required")
        assert tree.on("guests.1.name") == ["required"]
        assert tree.on("guests.1") is None
        assert tree.on("guests.0.name") is None
        assert not tree.is_empty()

    def test_merge_keeps_existing_codes_under_key(self):
        tree = ErrorTree()
        tree.child("array").add("minItems")

        subtree = ErrorTree(["minimum"])
        subtree.child(0).add("minimum")
        tree.merge("array", subtree)

        assert tree.on("array") == ["minItems", "minimum"]
        assert tree.on("array.0") == ["minimum"]

    def test_merge_of_empty_subtree_creates_no_node(self):
        tree = ErrorTree()
        tree.merge("name", ErrorTree())
        assert "name" not in tree.children
        assert tree.is_empty()

    def test_merge_grafts_nested_children(self):
        left = ErrorTree()
        left.child("a").child("b").add("pattern")
        right = ErrorTree()
        right.child("b").add("enum")
        right.child("c").add("format")

        left.merge("a", right)

        assert left.on("a.b") == ["pattern", "enum"]
        assert left.on("a.c") == ["format"]

    def test_report_is_depth_first_and_deterministic(self):
        tree = ErrorTree(["required"])
        tree.child("object").child("test").add("minLength")
        tree.child("number").extend(["minimum", "divisibleBy"])

        assert list(tree.report()) == [
            ("", ["required"]),
            ("object.test", ["minLength"]),
            ("number", ["minimum", "divisibleBy"]),
        ]
        assert tree.to_dict() == {
            "": ["required"],
            "object.test": ["minLength"],
            "number": ["minimum", "divisibleBy"],
        }
        assert len(tree) == 4

    def test_trees_with_same_report_compare_equal(self):
        a = ErrorTree()
        a.child("x").add("enum")
        b = ErrorTree()
        b.child("x").add("enum")
        b.child("y")
        assert a == b

    def test_on_returns_a_copy(self):
        tree = ErrorTree()
        tree.child("x").add("enum")
        codes = tree.on("x")
        assert codes is not None
        codes.append("pattern")
        assert tree.on("x") == ["enum"]
