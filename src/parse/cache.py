"""Per-path cache of parsed templates."""

from __future__ import annotations

import logging
import os
import threading
from pathlib import Path
from typing import TYPE_CHECKING

from parse.slim import SlimParser

if TYPE_CHECKING:
    from parse.nodes import Container

logger = logging.getLogger(__name__)


class ParserCache:
    """Parses each template file once and keeps the tree for the cache's lifetime.

    Entries are never invalidated: a file edited on disk after its first parse
    keeps returning the original tree. Read and parse errors propagate to the
    caller and leave no entry behind, so a later call retries the file.

    Lookups and inserts happen under one lock, so concurrent requests for an
    uncached path trigger a single parse and every caller receives the same
    tree object.
    """

    def __init__(self, parser: SlimParser | None = None, *, encoding: str = "utf-8") -> None:
        self._parser = parser if parser is not None else SlimParser()
        self._encoding = encoding
        self._parsed: dict[str, Container] = {}
        self._lock = threading.Lock()

    def get(self, path: str | os.PathLike[str]) -> Container:
        """Return the parsed tree for ``path``, parsing it on first request."""
        key = os.fspath(path)
        with self._lock:
            parsed = self._parsed.get(key)
            if parsed is None:
                source = Path(key).read_text(encoding=self._encoding)
                parsed = self._parser.parse(source, filename=key)
                self._parsed[key] = parsed
                logger.debug("parsed template %s", key)
        return parsed

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, (str, os.PathLike)):
            return False
        with self._lock:
            return os.fspath(path) in self._parsed

    def __len__(self) -> int:
        with self._lock:
            return len(self._parsed)


__all__ = ["ParserCache"]
