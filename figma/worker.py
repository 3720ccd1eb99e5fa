"""
figma/worker.py

Background worker that fetches a Figma file and normalizes it.
Runs in a separate thread to avoid blocking the UI.
"""

from __future__ import annotations

import traceback
from typing import List, Optional

from PyQt6.QtCore import QObject, pyqtSignal

from figma.client import FigmaClient
from figma.parser import normalize_document


class FetchWorker(QObject):
    """
    Fetches a Figma file and emits its normalized top-level nodes.

    A failed fetch never produces nodes, so nothing downstream can render
    a tree that did not load.

    Signals:
        finished(list): Emitted with the list of normalized ``Node`` on success
        failed(str): Emitted with error message on failure
    """

    finished = pyqtSignal(list)
    failed = pyqtSignal(str)

    def __init__(self, file_key: str, token: str, client: Optional[FigmaClient] = None,
                 node_ids: Optional[List[str]] = None):
        """
        Initialize the fetch worker.

        Args:
            file_key: Figma file key
            token: Figma personal access token
            client: Pre-built client to use instead of constructing one
            node_ids: Fetch only these nodes (and their subtrees) when given
        """
        super().__init__()
        self.file_key = file_key
        self.token = token
        self.client = client
        self.node_ids = list(node_ids or ())

    def run(self):
        """Execute the fetch and normalization."""
        try:
            client = self.client or FigmaClient(self.token)
            if self.node_ids:
                payload = client.fetch_nodes(self.file_key, self.node_ids)
            else:
                payload = client.fetch_file(self.file_key)
            nodes = normalize_document(payload)
            self.finished.emit(nodes)

        except Exception as e:
            msg = f"{e}\n\n{traceback.format_exc()}"
            self.failed.emit(msg)
