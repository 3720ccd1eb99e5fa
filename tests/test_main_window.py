"""Smoke tests for the main window wiring (tree checks, selection, import)."""
from __future__ import annotations

import pytest
from PyQt6.QtCore import Qt

from figma.parser import normalize_document
from main import MainWindow
from settings import get_settings

DOCUMENT = {"document": {"children": [{
    "id": "0:1", "name": "Page", "type": "CANVAS",
    "children": [
        {"id": "1:1", "name": "Box", "type": "RECTANGLE",
         "absoluteBoundingBox": {"x": 0, "y": 0, "width": 100, "height": 50},
         "fills": [{"type": "SOLID", "color": {"r": 0, "g": 0, "b": 1}}]},
        {"id": "1:2", "name": "Label", "type": "TEXT", "characters": "Hello",
         "absoluteBoundingBox": {"x": 10, "y": 10, "width": 40, "height": 20}},
    ],
}]}}


@pytest.fixture
def window(qapp):
    w = MainWindow(get_settings())
    w.load_nodes(normalize_document(DOCUMENT))
    yield w
    w.close()


def child_item(window, row):
    return window.tree.topLevelItem(0).child(row)


def test_tree_mirrors_document(window):
    page = window.tree.topLevelItem(0)
    assert page.text(0) == "Page"
    assert page.childCount() == 2
    assert child_item(window, 0).text(2) == "1:1"
    assert child_item(window, 1).text(1) == "TEXT"


def test_checking_toggles_selection(window):
    assert not window.import_act.isEnabled()
    child_item(window, 1).setCheckState(0, Qt.CheckState.Checked)
    child_item(window, 0).setCheckState(0, Qt.CheckState.Checked)
    assert window.selection.ids() == ("1:2", "1:1")
    assert window.import_act.isEnabled()

    child_item(window, 1).setCheckState(0, Qt.CheckState.Unchecked)
    assert window.selection.ids() == ("1:1",)


def test_clear_selection_unchecks_tree(window):
    child_item(window, 0).setCheckState(0, Qt.CheckState.Checked)
    window.clear_selection()
    assert len(window.selection) == 0
    assert child_item(window, 0).checkState(0) == Qt.CheckState.Unchecked


def test_import_renders_selection(window):
    window.scene.add_quick_circle()
    child_item(window, 0).setCheckState(0, Qt.CheckState.Checked)
    window.import_selection()
    (item,) = window.scene.children()
    assert item.to_record()["geom"] == {"x": 0, "y": 0, "w": 50, "h": 25}


def test_loading_new_document_clears_selection(window):
    child_item(window, 0).setCheckState(0, Qt.CheckState.Checked)
    window.load_nodes(normalize_document(DOCUMENT))
    assert len(window.selection) == 0


def test_clear_canvas(window):
    window.scene.add_quick_rectangle()
    window.scene.add_quick_square()
    window.clear_canvas()
    assert window.scene.children() == []
