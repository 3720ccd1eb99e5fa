"""
main.py

FigSync - Figma to canvas importer

PyQt6 application that:
- Fetches a Figma file over the REST API
- Shows its node tree with check boxes for selecting nodes
- Imports the selected nodes onto a canvas at half scale

Usage:
    python main.py

Dependencies:
    pip install PyQt6 httpx platformdirs tomli-w

Environment:
    FIGMA_TOKEN=... (optional, pre-fills the access token field)
"""

from __future__ import annotations

import os
import sys
from typing import List, Optional

from PyQt6.QtCore import Qt, QThread
from PyQt6.QtGui import QAction, QActionGroup
from PyQt6.QtWidgets import (
    QApplication,
    QFormLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QSplitter,
    QToolBar,
    QTreeWidget,
    QTreeWidgetItem,
    QVBoxLayout,
    QWidget,
)

from canvas import DocumentScene, DocumentView
from errors import EmptySelectionError, ImportFailedError
from figma.client import TOKEN_ENV, parse_file_key, parse_node_ids
from figma.renderer import CanvasRenderer
from figma.worker import FetchWorker
from importer import ImportOrchestrator
from models import Node
from selection import SelectionSet
from settings import SettingsManager, get_settings
from styles import DEFAULT_STYLE, STYLES
from debug_trace import trace, trace_exception, close_log

# Tree columns
COL_NAME = 0
COL_TYPE = 1
COL_ID = 2

NODE_ROLE = Qt.ItemDataRole.UserRole


def _first_line(msg: str) -> str:
    """Short user-facing part of a worker error message."""
    lines = (msg or "").strip().splitlines()
    return lines[0] if lines else "Unknown error"


class MainWindow(QMainWindow):
    """Main window: fetch form and node tree on the left, canvas on the right."""

    def __init__(self, settings_manager: SettingsManager):
        super().__init__()
        self.settings_manager = settings_manager
        self.setWindowTitle("FigSync")

        self.nodes: List[Node] = []
        self._populating_tree = False
        self._thread: Optional[QThread] = None
        self._worker: Optional[FetchWorker] = None

        self.scene = DocumentScene(self)
        self.view = DocumentView(self.scene)
        self.selection = SelectionSet(on_changed=self._on_selection_changed)
        self.renderer = CanvasRenderer(self.scene)
        self.orchestrator = ImportOrchestrator(self.renderer)

        self._build_ui()
        self._build_toolbar()
        self._on_selection_changed(self.selection)
        self.statusBar().showMessage("Enter a Figma file key and access token, then click Fetch.")

    # ---- UI construction ----

    def _build_ui(self):
        left = QWidget()
        left_layout = QVBoxLayout(left)

        form = QFormLayout()
        self.token_edit = QLineEdit(os.environ.get(TOKEN_ENV, ""))
        self.token_edit.setEchoMode(QLineEdit.EchoMode.Password)
        self.token_edit.setPlaceholderText("Personal access token")
        form.addRow("Token:", self.token_edit)

        self.file_key_edit = QLineEdit(self.settings_manager.settings.last_file_key)
        self.file_key_edit.setPlaceholderText("File key or figma.com URL")
        self.file_key_edit.returnPressed.connect(self.fetch_document)
        form.addRow("File:", self.file_key_edit)
        left_layout.addLayout(form)

        buttons = QHBoxLayout()
        self.fetch_btn = QPushButton("Fetch")
        self.fetch_btn.clicked.connect(self.fetch_document)
        buttons.addWidget(self.fetch_btn)
        self.import_btn = QPushButton("Import Selected")
        self.import_btn.clicked.connect(self.import_selection)
        buttons.addWidget(self.import_btn)
        left_layout.addLayout(buttons)

        self.tree = QTreeWidget()
        self.tree.setHeaderLabels(["Name", "Type", "ID"])
        self.tree.setAlternatingRowColors(True)
        self.tree.itemChanged.connect(self._on_tree_item_changed)
        left_layout.addWidget(self.tree, 1)

        self.selection_label = QLabel()
        left_layout.addWidget(self.selection_label)

        splitter = QSplitter(Qt.Orientation.Horizontal)
        splitter.addWidget(left)
        splitter.addWidget(self.view)
        splitter.setStretchFactor(0, 0)
        splitter.setStretchFactor(1, 1)
        splitter.setSizes([380, 1000])
        self.setCentralWidget(splitter)

    def _build_toolbar(self):
        tb = QToolBar("Main")
        tb.setMovable(False)
        self.addToolBar(tb)

        self.import_act = QAction("Import", self)
        self.import_act.triggered.connect(self.import_selection)
        tb.addAction(self.import_act)

        clear_canvas_act = QAction("Clear Canvas", self)
        clear_canvas_act.triggered.connect(self.clear_canvas)
        tb.addAction(clear_canvas_act)

        clear_sel_act = QAction("Clear Selection", self)
        clear_sel_act.triggered.connect(self.clear_selection)
        tb.addAction(clear_sel_act)

        tb.addSeparator()

        rect_act = QAction("Rectangle", self)
        rect_act.triggered.connect(lambda: self.scene.add_quick_rectangle())
        tb.addAction(rect_act)

        square_act = QAction("Square", self)
        square_act.triggered.connect(lambda: self.scene.add_quick_square())
        tb.addAction(square_act)

        circle_act = QAction("Circle", self)
        circle_act.triggered.connect(lambda: self.scene.add_quick_circle())
        tb.addAction(circle_act)

        tb.addSeparator()

        fit_act = QAction("Fit", self)
        fit_act.triggered.connect(self.view.fit_to_contents)
        tb.addAction(fit_act)

        # Theme menu
        theme_menu = self.menuBar().addMenu("&View")
        group = QActionGroup(self)
        for name in STYLES:
            act = QAction(name, self, checkable=True)
            act.setChecked(name == self.settings_manager.settings.theme)
            act.triggered.connect(lambda _checked, n=name: self.apply_theme(n))
            group.addAction(act)
            theme_menu.addAction(act)

    def apply_theme(self, name: str):
        """Switch stylesheet and remember the choice."""
        app = QApplication.instance()
        if app is not None and name in STYLES:
            app.setStyleSheet(STYLES[name])
            self.settings_manager.settings.theme = name

    # ---- Fetch ----

    def fetch_document(self):
        """Start fetching the Figma file in a background thread."""
        token = self.token_edit.text().strip()
        if not token:
            QMessageBox.warning(self, "Missing token", "Enter a Figma personal access token.")
            return
        try:
            file_key = parse_file_key(self.file_key_edit.text())
        except ValueError as e:
            QMessageBox.warning(self, "Invalid file", str(e))
            return

        self.settings_manager.settings.last_file_key = self.file_key_edit.text().strip()
        self.fetch_btn.setEnabled(False)
        # A share link with node-id fetches just those nodes
        node_ids = parse_node_ids(self.file_key_edit.text())
        what = f"{len(node_ids)} nodes of " if node_ids else ""
        self.statusBar().showMessage(f"Fetching {what}Figma file {file_key} ...")
        trace(f"Fetching file {file_key}", "MAIN")

        self._thread = QThread()
        self._worker = FetchWorker(file_key, token, node_ids=node_ids)
        self._worker.moveToThread(self._thread)

        self._thread.started.connect(self._worker.run)
        self._worker.finished.connect(self.on_fetch_finished)
        self._worker.failed.connect(self.on_fetch_failed)

        self._worker.finished.connect(self._thread.quit)
        self._worker.failed.connect(self._thread.quit)

        def _reenable():
            self.fetch_btn.setEnabled(True)

        self._thread.finished.connect(_reenable)
        self._thread.finished.connect(self._thread.deleteLater)

        self._thread.start()

    def on_fetch_finished(self, nodes: list):
        """Show a freshly loaded document; the old selection no longer applies."""
        self.load_nodes(nodes)
        count = sum(1 for root in nodes for _ in root.iter_tree())
        self.statusBar().showMessage(f"Loaded {count} nodes. Check nodes to select them for import.")

    def on_fetch_failed(self, err: str):
        """Handle fetch failure."""
        trace(f"Fetch failed: {err}", "ERROR")
        QMessageBox.critical(self, "Fetch failed", _first_line(err))
        self.statusBar().showMessage("Fetch failed.")

    # ---- Node tree ----

    def load_nodes(self, nodes: List[Node]):
        """Replace the node tree and reset the selection."""
        self.nodes = list(nodes)
        self.selection.clear()
        self._populating_tree = True
        try:
            self.tree.clear()
            for node in self.nodes:
                self.tree.addTopLevelItem(self._make_tree_item(node))
            self.tree.expandToDepth(1)
        finally:
            self._populating_tree = False

    def _make_tree_item(self, root: Node) -> QTreeWidgetItem:
        root_item = self._tree_item_for(root)
        stack = [(root, root_item)]
        while stack:
            node, item = stack.pop()
            for child in node.children or ():
                child_item = self._tree_item_for(child)
                item.addChild(child_item)
                stack.append((child, child_item))
        return root_item

    def _tree_item_for(self, node: Node) -> QTreeWidgetItem:
        item = QTreeWidgetItem([node.name or "(unnamed)", node.type, node.id])
        item.setFlags(item.flags() | Qt.ItemFlag.ItemIsUserCheckable)
        item.setCheckState(COL_NAME, Qt.CheckState.Unchecked)
        item.setData(COL_NAME, NODE_ROLE, node)
        return item

    def _on_tree_item_changed(self, item: QTreeWidgetItem, column: int):
        if self._populating_tree or column != COL_NAME:
            return
        node = item.data(COL_NAME, NODE_ROLE)
        if not isinstance(node, Node):
            return
        checked = item.checkState(COL_NAME) == Qt.CheckState.Checked
        if checked != (node in self.selection):
            self.selection.toggle(node)

    def _sync_tree_checks(self):
        """Mirror selection membership onto every tree item's check box."""
        self._populating_tree = True
        try:
            stack = [self.tree.topLevelItem(i) for i in range(self.tree.topLevelItemCount())]
            while stack:
                item = stack.pop()
                node = item.data(COL_NAME, NODE_ROLE)
                state = Qt.CheckState.Checked if node in self.selection else Qt.CheckState.Unchecked
                item.setCheckState(COL_NAME, state)
                stack.extend(item.child(i) for i in range(item.childCount()))
        finally:
            self._populating_tree = False

    def _on_selection_changed(self, selection: SelectionSet):
        n = len(selection)
        self.selection_label.setText(f"{n} node{'s' if n != 1 else ''} selected")
        self.import_act.setEnabled(n > 0)
        self.import_btn.setEnabled(n > 0)

    # ---- Import / clear ----

    def import_selection(self):
        """Replace the canvas contents with the selected nodes."""
        try:
            created = self.orchestrator.import_selection(self.selection)
        except EmptySelectionError as e:
            QMessageBox.warning(self, "Nothing selected", str(e))
            return
        except ImportFailedError as e:
            QMessageBox.critical(self, "Import failed", str(e))
            self.statusBar().showMessage("Import failed.")
            return
        self.view.fit_to_contents()
        self.statusBar().showMessage(f"Imported {len(self.selection)} nodes as {created} items.")

    def clear_canvas(self):
        try:
            removed = self.renderer.clear()
        except Exception as e:
            trace_exception("Clear canvas failed")
            QMessageBox.critical(self, "Clear failed", str(e))
            return
        self.statusBar().showMessage(f"Removed {removed} items from the canvas.")

    def clear_selection(self):
        self.selection.clear()
        self._sync_tree_checks()


def main():
    """Application entry point."""
    trace("Application starting", "MAIN")
    app = QApplication(sys.argv)

    # Load settings (use singleton to ensure single instance)
    trace("Loading settings", "MAIN")
    settings_manager = get_settings()

    # Ensure settings file has all sections
    settings_manager.ensure_file_complete()

    # Apply saved theme (or default if not set)
    initial_style = settings_manager.settings.theme
    if initial_style not in STYLES:
        initial_style = DEFAULT_STYLE
        settings_manager.settings.theme = initial_style

    app.setStyleSheet(STYLES[initial_style])

    # Save settings on application quit
    def save_on_quit():
        trace("Saving settings on quit", "MAIN")
        settings_manager.save()
        close_log()

    app.aboutToQuit.connect(save_on_quit)

    trace("Creating MainWindow", "MAIN")
    w = MainWindow(settings_manager)
    w.resize(1400, 900)
    w.show()
    trace("Entering event loop", "MAIN")
    sys.exit(app.exec())


if __name__ == "__main__":
    # Set up global exception handler to catch crashes
    def excepthook(exc_type, exc_value, exc_tb):
        import traceback
        trace("UNCAUGHT EXCEPTION:", "CRASH")
        trace("".join(traceback.format_exception(exc_type, exc_value, exc_tb)), "CRASH")
        close_log()
        sys.__excepthook__(exc_type, exc_value, exc_tb)

    sys.excepthook = excepthook

    try:
        main()
    except Exception as e:
        trace(f"FATAL: {type(e).__name__}: {e}", "CRASH")
        trace_exception("Fatal exception")
        close_log()
        raise
