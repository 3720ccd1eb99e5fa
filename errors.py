"""
errors.py

Exception types raised by the FigSync import pipeline.
"""

from __future__ import annotations

from typing import Optional


class FigSyncError(Exception):
    """Base class for all FigSync errors."""


class MalformedDocumentError(FigSyncError, ValueError):
    """Raised when a fetched payload does not contain a document tree."""


class DocumentTooDeepError(FigSyncError, ValueError):
    """Raised when a node tree is nested deeper than the configured maximum."""

    def __init__(self, max_depth: int, node_id: str = ""):
        where = f" at node {node_id!r}" if node_id else ""
        super().__init__(f"Document nesting exceeds the maximum depth of {max_depth}{where}.")
        self.max_depth = max_depth
        self.node_id = node_id


class EmptySelectionError(FigSyncError, ValueError):
    """Raised when an import is requested with nothing selected."""

    def __init__(self, message: str = "Select at least one node to import."):
        super().__init__(message)


class ImportFailedError(FigSyncError, RuntimeError):
    """Raised when clearing or rendering the canvas fails during an import.

    Primitives created before the failure stay on the canvas.
    """


class FigmaFetchError(FigSyncError, RuntimeError):
    """Raised when the Figma REST API call fails.

    Attributes:
        status: HTTP status code, or None for transport-level failures.
    """

    def __init__(self, status: Optional[int], message: str):
        prefix = f"HTTP {status}: " if status is not None else ""
        super().__init__(f"{prefix}{message}")
        self.status = status
        self.message = message
