"""Errors raised while extracting example source."""

from __future__ import annotations

import os


class ExtractionError(Exception):
    """Base class for source extraction failures."""


class CallSiteNotFound(ExtractionError):
    """Raised when no top-level call in a template matches the request."""

    def __init__(self, path: str | os.PathLike[str], method_name: str, argument: str) -> None:
        self.path = os.fspath(path)
        self.method_name = method_name
        self.argument = argument
        super().__init__(
            f"No top-level call {method_name} '{argument}' found in {self.path}"
        )


__all__ = ["CallSiteNotFound", "ExtractionError"]
