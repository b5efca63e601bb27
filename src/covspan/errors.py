from __future__ import annotations

from dataclasses import dataclass

from .region import SourceRegion
from .spans import Span


@dataclass(slots=True)
class SpanSnippetError(Exception):
    span: Span
    message: str

    def __str__(self) -> str:
        return f"{self.span.format()}: {self.message}"


@dataclass(slots=True)
class ImproperSourceRegion(AssertionError):
    """Raised instead of dropping a malformed region when the strict check is on."""

    region: SourceRegion
    all_in_range: bool
    end_col_has_high_bit_unset: bool
    is_ordered: bool

    def __str__(self) -> str:
        failed = [
            name
            for name, ok in (
                ("all_in_range", self.all_in_range),
                ("end_col_has_high_bit_unset", self.end_col_has_high_bit_unset),
                ("is_ordered", self.is_ordered),
            )
            if not ok
        ]
        return f"improper source region: {self.region} (failed: {', '.join(failed)})"
