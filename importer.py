"""
importer.py

Import the current selection onto the canvas: clear, then render.
"""

from __future__ import annotations

from figma.renderer import CanvasRenderer
from errors import EmptySelectionError, ImportFailedError
from selection import SelectionSet
from debug_trace import trace, trace_exception


class ImportOrchestrator:
    """
    Replaces the canvas contents with the selected nodes.

    There is no transaction: if a creation call fails part-way, the items
    already created stay on the canvas and the failure is reported.

    Args:
        renderer: Renderer bound to the target canvas.
    """

    def __init__(self, renderer: CanvasRenderer):
        self.renderer = renderer

    def import_selection(self, selection: SelectionSet) -> int:
        """
        Clear the canvas and render *selection* in insertion order.

        Args:
            selection: The nodes to import.

        Returns:
            Number of primitives created.

        Raises:
            EmptySelectionError: If *selection* is empty; the canvas is untouched.
            ImportFailedError: If clearing or rendering fails.
        """
        if not selection:
            raise EmptySelectionError()

        nodes = selection.nodes()
        trace(f"Importing {len(nodes)} selected nodes", "IMPORT")

        try:
            self.renderer.clear()
        except Exception as e:
            trace_exception("Clearing canvas failed")
            raise ImportFailedError(f"Could not clear the canvas: {e}") from e

        try:
            return self.renderer.render_many(nodes)
        except Exception as e:
            trace_exception("Rendering selection failed")
            raise ImportFailedError(f"Could not render the selection: {e}") from e
