"""Unit tests for tree/models.py — FolderNode construction and traversal."""

import pytest

from folder_sheet.tree.models import FolderNode, add_child, create_node


class TestCreateNode:
    def test_creates_node_without_children(self) -> None:
        node = create_node("Projects")
        assert node.name == "Projects"
        assert node.children == []

    def test_rejects_empty_name(self) -> None:
        with pytest.raises(ValueError, match="must not be empty"):
            create_node("")

    def test_nodes_compare_by_identity(self) -> None:
        assert create_node("A") != create_node("A")


class TestAddChild:
    def test_appends_in_insertion_order(self) -> None:
        parent = create_node("root")
        add_child(parent, create_node("b"))
        add_child(parent, create_node("a"))
        add_child(parent, create_node("c"))
        assert [c.name for c in parent.children] == ["b", "a", "c"]

    def test_returns_the_child(self) -> None:
        parent = create_node("root")
        child = create_node("x")
        assert add_child(parent, child) is child

    def test_duplicate_sibling_names_are_allowed(self) -> None:
        parent = create_node("root")
        parent.add_child(create_node("dup"))
        parent.add_child(create_node("dup"))
        assert len(parent.children) == 2


class TestSynthetic:
    def test_nodes_are_real_by_default(self) -> None:
        assert create_node("root").synthetic is False
        assert FolderNode("A", [FolderNode("B")]).synthetic is False

class TestWalk:
    def test_pre_order_with_depths(self) -> None:
        root = FolderNode(
            "root",
            [
                FolderNode("A", [FolderNode("A1"), FolderNode("A2", [FolderNode("A2x")])]),
                FolderNode("B"),
            ],
        )
        visited = [(depth, node.name) for depth, node in root.walk()]
        assert visited == [
            (0, "root"),
            (1, "A"),
            (2, "A1"),
            (2, "A2"),
            (3, "A2x"),
            (1, "B"),
        ]

    def test_single_node(self) -> None:
        assert [(d, n.name) for d, n in create_node("only").walk()] == [(0, "only")]


class TestSameShape:
    def test_ignores_root_names(self) -> None:
        a = FolderNode("Drive", [FolderNode("A", [FolderNode("B")])])
        b = FolderNode("root", [FolderNode("A", [FolderNode("B")])])
        assert a.same_shape(b)

    def test_detects_child_order(self) -> None:
        a = FolderNode("r", [FolderNode("A"), FolderNode("B")])
        b = FolderNode("r", [FolderNode("B"), FolderNode("A")])
        assert not a.same_shape(b)

    def test_detects_depth(self) -> None:
        a = FolderNode("r", [FolderNode("A", [FolderNode("B")])])
        b = FolderNode("r", [FolderNode("A"), FolderNode("B")])
        assert not a.same_shape(b)
