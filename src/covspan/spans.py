from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True, slots=True)
class Span:
    """Half-open span [lo, hi) of absolute byte positions.

    Positions live in the byte space shared by every file of a source map;
    a span does not record which file it belongs to.
    """

    lo: int
    hi: int

    def __post_init__(self) -> None:
        if self.lo < 0 or self.hi < 0:
            raise ValueError(f"span bounds must be non-negative: {self.format()}")
        if self.lo > self.hi:
            raise ValueError(f"span bounds are reversed: {self.format()}")

    def is_empty(self) -> bool:
        return self.lo == self.hi

    def with_lo(self, lo: int) -> Span:
        return replace(self, lo=lo)

    def with_hi(self, hi: int) -> Span:
        return replace(self, hi=hi)

    # Moving a bound by one byte is only correct when the byte skipped over
    # is known to be a single-byte (ASCII) character.
    def grow_hi_by_one_byte(self) -> Span:
        return self.with_hi(self.hi + 1)

    def grow_lo_by_one_byte(self) -> Span:
        return self.with_lo(self.lo - 1)

    def format(self) -> str:
        return f"{self.lo}..{self.hi}"
