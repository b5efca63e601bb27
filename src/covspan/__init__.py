from __future__ import annotations

import logging

from .config import RegionCheckPolicy, default_policy
from .convert import (
    check_source_region,
    doctest_adjusted_line,
    ensure_non_empty_span,
    line_and_byte_column,
    make_source_region,
    make_source_regions,
)
from .errors import ImproperSourceRegion, SpanSnippetError
from .region import SourceRegion
from .source import FileName, SourceFile, SourceMap
from .spans import Span

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "FileName",
    "ImproperSourceRegion",
    "RegionCheckPolicy",
    "SourceFile",
    "SourceMap",
    "SourceRegion",
    "Span",
    "SpanSnippetError",
    "check_source_region",
    "default_policy",
    "doctest_adjusted_line",
    "ensure_non_empty_span",
    "line_and_byte_column",
    "make_source_region",
    "make_source_regions",
]
