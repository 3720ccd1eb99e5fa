"""
figma/client.py

Minimal Figma REST client used to fetch a file's node tree.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, List, Optional
from urllib.parse import parse_qs, urlsplit

import httpx

from errors import FigmaFetchError
from settings import get_settings
from debug_trace import trace

log = logging.getLogger(__name__)

TOKEN_ENV = "FIGMA_TOKEN"

# figma.com/file/<key>/..., figma.com/design/<key>/..., figma.com/proto/<key>/...
_FILE_URL_RE = re.compile(r"figma\.com/(?:file|design|proto|board)/([A-Za-z0-9]+)")
_FILE_KEY_RE = re.compile(r"^[A-Za-z0-9]+$")


def parse_file_key(url_or_key: str) -> str:
    """
    Extract a Figma file key from a share URL, or validate a bare key.

    Args:
        url_or_key: A ``https://www.figma.com/file/<key>/...`` style URL or a key.

    Returns:
        The file key.

    Raises:
        ValueError: If no key can be found.
    """
    s = (url_or_key or "").strip()
    m = _FILE_URL_RE.search(s)
    if m:
        return m.group(1)
    if _FILE_KEY_RE.match(s):
        return s
    raise ValueError(f"Not a Figma file key or URL: {url_or_key!r}")


def parse_node_ids(url_or_key: str) -> List[str]:
    """
    Extract the node ids a share URL points at (its ``node-id`` query).

    Share links write ids as ``12-345``; the API expects ``12:345``.
    A bare key or a URL without ``node-id`` yields an empty list.
    """
    query = urlsplit((url_or_key or "").strip()).query
    ids = []
    for value in parse_qs(query).get("node-id", []):
        for part in value.split(","):
            part = part.strip().replace("-", ":")
            if part:
                ids.append(part)
    return ids


class FigmaClient:
    """
    Fetches Figma files over HTTPS.

    Args:
        token: Personal access token sent as ``X-Figma-Token``.
        base_url: API root; defaults to ``settings.figma.api_base_url``.
        timeout: Request timeout in seconds; defaults to ``settings.figma.timeout_s``.
        transport: Optional httpx transport (used by tests).
    """

    def __init__(
        self,
        token: str,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        if not token or not token.strip():
            raise ValueError("A Figma access token is required.")
        api = get_settings().settings.figma
        self.token = token.strip()
        self.base_url = (base_url or api.api_base_url).rstrip("/")
        self.timeout = api.timeout_s if timeout is None else timeout
        self._transport = transport

    def _client(self) -> httpx.Client:
        return httpx.Client(
            base_url=self.base_url,
            headers={"X-Figma-Token": self.token},
            timeout=self.timeout,
            transport=self._transport,
        )

    def fetch_file(self, file_key: str) -> Dict[str, Any]:
        """
        Fetch a whole Figma file.

        Args:
            file_key: Figma file key.

        Returns:
            Decoded JSON response (``{"document": {...}, ...}``).

        Raises:
            ValueError: If *file_key* is empty.
            FigmaFetchError: On HTTP, transport or decoding failures.
        """
        if not file_key or not file_key.strip():
            raise ValueError("A Figma file key is required.")
        return self._get(f"/v1/files/{file_key.strip()}")

    def fetch_nodes(self, file_key: str, node_ids: list) -> Dict[str, Any]:
        """Fetch selected nodes of a file (``GET /v1/files/:key/nodes``).

        Used when the share link carries a ``node-id``; the response is
        accepted by ``normalize_document``.
        """
        if not file_key or not file_key.strip():
            raise ValueError("A Figma file key is required.")
        if not node_ids:
            raise ValueError("At least one node id is required.")
        return self._get(f"/v1/files/{file_key.strip()}/nodes", params={"ids": ",".join(node_ids)})

    def _get(self, path: str, params: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
        trace(f"GET {self.base_url}{path}", "FETCH")
        try:
            with self._client() as client:
                response = client.get(path, params=params)
        except httpx.HTTPError as e:
            log.warning("Figma request failed: %s", e)
            raise FigmaFetchError(None, f"Could not reach Figma: {e}") from e

        if response.status_code >= 400:
            raise FigmaFetchError(response.status_code, self._error_message(response))

        try:
            data = response.json()
        except ValueError as e:
            raise FigmaFetchError(response.status_code, "Figma returned invalid JSON.") from e
        if not isinstance(data, dict):
            raise FigmaFetchError(response.status_code, "Figma returned an unexpected payload.")
        trace(f"Fetched {path} ({len(response.content)} bytes)", "FETCH")
        return data

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        """Pull Figma's ``err``/``message`` field out of an error response."""
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            for key in ("err", "message"):
                if isinstance(body.get(key), str) and body[key]:
                    return body[key]
        return response.reason_phrase or "Request failed"
