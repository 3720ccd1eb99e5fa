"""Tests for ImportOrchestrator and the end-to-end import pipeline."""
from __future__ import annotations

import pytest

from canvas.items import NodeRectItem
from canvas.scene import DocumentScene
from errors import EmptySelectionError, ImportFailedError
from figma.parser import find_node, normalize_document
from figma.renderer import CanvasRenderer
from importer import ImportOrchestrator
from models import Node
from selection import SelectionSet

from test_renderer import RecordingCanvas

SAMPLE_DOCUMENT = {
    "document": {
        "children": [{
            "id": "1",
            "type": "RECTANGLE",
            "absoluteBoundingBox": {"x": 0, "y": 0, "width": 100, "height": 50},
            "fills": [{"type": "SOLID", "color": {"r": 0, "g": 0, "b": 1}}],
        }],
    },
}


def rect(node_id, x=0):
    return Node(id=node_id, name=node_id, type="RECTANGLE", x=x, y=0, width=10, height=10, fill="#ff0000")


class FailingRemoveCanvas(RecordingCanvas):

    def remove(self, item):
        raise RuntimeError("locked layer")


def test_empty_selection_is_rejected_before_touching_canvas():
    canvas = RecordingCanvas()
    canvas.items.append({"kind": "rectangle", "args": ()})
    orchestrator = ImportOrchestrator(CanvasRenderer(canvas))
    with pytest.raises(EmptySelectionError):
        orchestrator.import_selection(SelectionSet())
    assert len(canvas.items) == 1
    assert canvas.calls == []


def test_import_replaces_canvas_contents():
    canvas = RecordingCanvas()
    renderer = CanvasRenderer(canvas)
    renderer.render_many([rect("old1"), rect("old2")])

    sel = SelectionSet()
    for n in (rect("a", x=2), rect("b", x=4), rect("c", x=6)):
        sel.toggle(n)
    assert ImportOrchestrator(renderer).import_selection(sel) == 3
    assert [item["args"][0] for item in canvas.items] == [1, 2, 3]


def test_import_follows_selection_order():
    canvas = RecordingCanvas()
    sel = SelectionSet()
    for n in (rect("b", x=4), rect("a", x=2)):
        sel.toggle(n)
    ImportOrchestrator(CanvasRenderer(canvas)).import_selection(sel)
    assert [item["args"][0] for item in canvas.items] == [2, 1]


def test_render_failure_is_reported():
    canvas = RecordingCanvas(fail_on_create=2)
    sel = SelectionSet()
    sel.toggle(rect("a"))
    sel.toggle(rect("b"))
    with pytest.raises(ImportFailedError) as exc:
        ImportOrchestrator(CanvasRenderer(canvas)).import_selection(sel)
    assert "canvas refused the item" in str(exc.value)
    assert isinstance(exc.value.__cause__, RuntimeError)


def test_clear_failure_is_reported_and_nothing_rendered():
    canvas = FailingRemoveCanvas()
    canvas.items.append({"kind": "rectangle", "args": ()})
    sel = SelectionSet()
    sel.toggle(rect("a"))
    with pytest.raises(ImportFailedError, match="clear"):
        ImportOrchestrator(CanvasRenderer(canvas)).import_selection(sel)
    assert not any(c[0].startswith("create_") for c in canvas.calls)


def test_end_to_end_sample_document():
    nodes = normalize_document(SAMPLE_DOCUMENT)
    sel = SelectionSet()
    sel.toggle(find_node(nodes, "1"))

    canvas = RecordingCanvas()
    assert ImportOrchestrator(CanvasRenderer(canvas)).import_selection(sel) == 1
    assert canvas.calls == [("create_rectangle", 0, 0, 50, 25, (0.0, 0.0, 1.0, 1.0))]


def test_end_to_end_onto_scene(qapp):
    nodes = normalize_document(SAMPLE_DOCUMENT)
    sel = SelectionSet()
    sel.toggle(nodes[0])

    scene = DocumentScene()
    scene.add_quick_square()
    ImportOrchestrator(CanvasRenderer(scene)).import_selection(sel)

    (item,) = scene.children()
    assert isinstance(item, NodeRectItem)
    assert item.to_record() == {
        "node_id": "1",
        "kind": "rect",
        "geom": {"x": 0, "y": 0, "w": 50, "h": 25},
        "fill": "#0000ff",
    }
