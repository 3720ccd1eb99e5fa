"""Tests for the raw ingestion models and the normalized Node."""
from __future__ import annotations

from models import Node, RawFill, RawNode


def test_raw_node_keeps_unknown_keys():
    raw = RawNode.from_dict({
        "id": "1", "name": "n", "type": "RECTANGLE",
        "absoluteBoundingBox": {"x": 1, "y": 2, "width": 3, "height": 4},
        "cornerRadius": 8, "blendMode": "NORMAL",
    })
    assert raw.extras == {"cornerRadius": 8, "blendMode": "NORMAL"}
    assert raw.bounding_box.width == 3


def test_raw_node_from_non_dict():
    assert RawNode.from_dict("nope") == RawNode()


def test_raw_node_fills_presence():
    assert RawNode.from_dict({"id": "1"}).fills is None
    assert RawNode.from_dict({"id": "1", "fills": []}).fills == ()
    fills = RawNode.from_dict({"id": "1", "fills": [{"type": "solid"}, 3]}).fills
    assert fills == (RawFill(type="solid"), RawFill())
    assert fills[0].is_solid


def test_node_to_dict_omits_unset_fields():
    leaf = Node(id="t", name="T", type="TEXT", x=0.0, y=0.0, text="Hi",
                font_size=16, font_family="Arial", fill="#5256e3")
    root = Node(id="g", name="G", type="GROUP", x=0.0, y=0.0, children=(leaf,))
    assert root.to_dict() == {
        "id": "g", "name": "G", "type": "GROUP", "x": 0.0, "y": 0.0,
        "children": [{
            "id": "t", "name": "T", "type": "TEXT", "x": 0.0, "y": 0.0,
            "fill": "#5256e3", "text": "Hi", "fontSize": 16, "fontFamily": "Arial",
        }],
    }


def test_iter_tree_is_preorder():
    tree = Node(id="a", name="", type="GROUP", children=(
        Node(id="b", name="", type="GROUP", children=(Node(id="c", name="", type="TEXT"),)),
        Node(id="d", name="", type="TEXT"),
    ))
    assert [n.id for n in tree.iter_tree()] == ["a", "b", "c", "d"]


def test_has_geometry():
    assert Node(id="a", name="", type="RECTANGLE", x=0, y=0, width=0, height=0).has_geometry
    assert not Node(id="a", name="", type="RECTANGLE", x=0, y=0, width=5).has_geometry


def test_bounding_box_rejects_unusable_numbers():
    bbox = RawNode.from_dict({"absoluteBoundingBox": {
        "x": 10 ** 400, "y": float("nan"), "width": float("inf"), "height": 12,
    }}).bounding_box
    assert (bbox.x, bbox.y, bbox.width, bbox.height) == (None, None, None, 12.0)
