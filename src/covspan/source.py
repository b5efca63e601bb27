from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass, field
from typing import Callable, TypeVar

from .errors import SpanSnippetError
from .spans import Span


T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class FileName:
    """Stable identity of a source file.

    A documentation example is compiled from a synthetic wrapper; its
    `doctest_line_offset` maps wrapper lines back to lines of `path`.
    """

    path: str
    doctest_line_offset: int | None = None

    def format(self) -> str:
        if self.doctest_line_offset is None:
            return self.path
        return f"{self.path} (doctest, line offset {self.doctest_line_offset:+d})"


def _line_starts(src: bytes) -> tuple[int, ...]:
    starts = [0]
    i = src.find(b"\n")
    while i != -1:
        starts.append(i + 1)
        i = src.find(b"\n", i + 1)
    return tuple(starts)


@dataclass(frozen=True, slots=True)
class SourceFile:
    """A loaded file: raw bytes plus file-relative line starts."""

    name: FileName
    src: bytes
    start_pos: int
    lines: tuple[int, ...]

    def __post_init__(self) -> None:
        if not self.lines or self.lines[0] != 0:
            raise ValueError(f"{self.name.format()}: line starts must begin at 0")
        if any(b <= a for a, b in zip(self.lines, self.lines[1:])):
            raise ValueError(f"{self.name.format()}: line starts must be strictly increasing")
        if self.lines[-1] > len(self.src):
            raise ValueError(f"{self.name.format()}: line starts run past the end of the source")
        if self.start_pos < 0:
            raise ValueError(f"{self.name.format()}: negative start position")

    @classmethod
    def from_text(cls, name: FileName | str, text: str | bytes, *, start_pos: int = 0) -> SourceFile:
        if isinstance(name, str):
            name = FileName(name)
        src = text.encode("utf-8") if isinstance(text, str) else bytes(text)
        return cls(name=name, src=src, start_pos=start_pos, lines=_line_starts(src))

    @property
    def end_pos(self) -> int:
        return self.start_pos + len(self.src)

    def contains(self, pos: int) -> bool:
        # End-inclusive: a span may end exactly at end-of-file.
        return self.start_pos <= pos <= self.end_pos

    def relative_position(self, pos: int) -> int:
        return pos - self.start_pos

    def lookup_line(self, rpos: int) -> int | None:
        """0-based index of the line containing file-relative position `rpos`."""
        if rpos > len(self.src):
            return None
        idx = bisect_right(self.lines, rpos) - 1
        if idx < 0:
            return None
        return idx


@dataclass(slots=True)
class SourceMap:
    files: list[SourceFile] = field(default_factory=list)

    def new_source_file(self, name: FileName | str, text: str | bytes) -> SourceFile:
        if isinstance(name, str):
            name = FileName(name)
        if any(f.name == name for f in self.files):
            raise ValueError(f"source file already registered: {name.format()}")
        # Leave a one-byte gap so no position is shared by two files.
        start_pos = self.files[-1].end_pos + 1 if self.files else 0
        sf = SourceFile.from_text(name, text, start_pos=start_pos)
        self.files.append(sf)
        return sf

    def lookup_source_file(self, pos: int) -> SourceFile | None:
        idx = bisect_right(self.files, pos, key=lambda f: f.start_pos) - 1
        if idx < 0:
            return None
        sf = self.files[idx]
        return sf if sf.contains(pos) else None

    def span_to_source(self, span: Span, extract: Callable[[bytes, int, int], T]) -> T:
        """Call `extract(src, start, end)` with the file holding `span`."""
        lo_file = self.lookup_source_file(span.lo)
        if lo_file is None:
            raise SpanSnippetError(span=span, message="span starts outside every known file")
        if not lo_file.contains(span.hi):
            raise SpanSnippetError(
                span=span,
                message=f"span is not contained in {lo_file.name.format()}",
            )
        start = lo_file.relative_position(span.lo)
        end = lo_file.relative_position(span.hi)
        return extract(lo_file.src, start, end)

    def doctest_offset_line(self, name: FileName, line: int) -> int:
        if name.doctest_line_offset is None:
            return line
        return line + name.doctest_line_offset
