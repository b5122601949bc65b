"""Source extraction for documented template blocks."""

from extract.engine import SourceExtractor
from extract.errors import CallSiteNotFound, ExtractionError
from extract.locate import CallSite, CallSiteQuery, find_call_site, iter_call_sites
from extract.span import (
    SourceSpan,
    body_line_count,
    count_line_breaks,
    count_source_lines,
    dedent_line,
    read_span,
)

__all__ = [
    "CallSite",
    "CallSiteNotFound",
    "CallSiteQuery",
    "ExtractionError",
    "SourceExtractor",
    "SourceSpan",
    "body_line_count",
    "count_line_breaks",
    "count_source_lines",
    "dedent_line",
    "find_call_site",
    "iter_call_sites",
    "read_span",
]
