from __future__ import annotations

from dataclasses import dataclass


U32_MAX = 2**32 - 1
# Coverage mappings use this bit of end_col to mark a "gap" region.
END_COL_GAP_BIT = 1 << 31


@dataclass(frozen=True, slots=True, order=True)
class SourceRegion:
    """Line/column rectangle of a covered span.

    All four fields are 1-based. Columns count bytes, not characters.
    """

    start_line: int
    start_col: int
    end_line: int
    end_col: int

    @property
    def start(self) -> tuple[int, int]:
        return (self.start_line, self.start_col)

    @property
    def end(self) -> tuple[int, int]:
        return (self.end_line, self.end_col)

    def __str__(self) -> str:
        return f"{self.start_line}:{self.start_col} - {self.end_line}:{self.end_col}"
