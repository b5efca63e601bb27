from __future__ import annotations

import logging
from typing import Iterable

from .config import RegionCheckPolicy, default_policy
from .errors import ImproperSourceRegion, SpanSnippetError
from .region import END_COL_GAP_BIT, U32_MAX, SourceRegion
from .source import SourceFile, SourceMap
from .spans import Span


logger = logging.getLogger(__name__)


def ensure_non_empty_span(source_map: SourceMap, span: Span) -> Span | None:
    """Widen an empty span to cover an adjacent '{' or '}'.

    Non-empty spans are returned unchanged. Returns None when the span is
    empty and neither brace is adjacent.
    """
    if not span.is_empty():
        return span

    def expand(src: bytes, start: int, end: int) -> Span | None:
        if src[end : end + 1] == b"{":
            return span.grow_hi_by_one_byte()
        if start > 0 and src[start - 1 : start] == b"}":
            return span.grow_lo_by_one_byte()
        return None

    try:
        return source_map.span_to_source(span, expand)
    except SpanSnippetError:
        return None


def line_and_byte_column(file: SourceFile, pos: int) -> tuple[int, int] | None:
    """1-based (line, column) of absolute position `pos`; columns count bytes."""
    rpos = file.relative_position(pos)
    line_index = file.lookup_line(rpos)
    if line_index is None:
        return None
    line_start = file.lines[line_index]
    return (line_index + 1, rpos - line_start + 1)


def doctest_adjusted_line(source_map: SourceMap, file: SourceFile, line: int) -> int:
    # Only lines are corrected; doctest columns keep their wrapper offsets.
    return source_map.doctest_offset_line(file.name, line)


def check_source_region(
    region: SourceRegion,
    policy: RegionCheckPolicy | None = None,
) -> SourceRegion | None:
    """Reject regions the coverage consumer would misread or abort on.

    The consumer exits with a fatal error on an improperly ordered region,
    so anything that fails a check is dropped instead of emitted.
    """
    # Coordinates are 1-based and stored as unsigned 32-bit integers.
    all_in_range = all(
        1 <= x <= U32_MAX
        for x in (region.start_line, region.start_col, region.end_line, region.end_col)
    )
    end_col_has_high_bit_unset = (region.end_col & END_COL_GAP_BIT) == 0
    is_ordered = region.start <= region.end
    if all_in_range and end_col_has_high_bit_unset and is_ordered:
        return region

    logger.debug(
        "Skipping source region that would be misinterpreted or rejected by the coverage consumer",
        extra={
            "source_region": str(region),
            "all_in_range": all_in_range,
            "end_col_has_high_bit_unset": end_col_has_high_bit_unset,
            "is_ordered": is_ordered,
        },
    )
    if policy is None:
        policy = default_policy()
    if policy.fail_on_improper_region:
        raise ImproperSourceRegion(
            region=region,
            all_in_range=all_in_range,
            end_col_has_high_bit_unset=end_col_has_high_bit_unset,
            is_ordered=is_ordered,
        )
    return None


def make_source_region(
    source_map: SourceMap,
    file: SourceFile,
    span: Span,
    policy: RegionCheckPolicy | None = None,
) -> SourceRegion | None:
    """Convert `span` into a validated region of `file`.

    Returns None if any step fails. That shouldn't happen for spans the
    compiler produced, but skipping one span is better than a malformed
    region reaching the coverage consumer.
    """
    expanded = ensure_non_empty_span(source_map, span)
    if expanded is None:
        return None
    if not (file.contains(expanded.lo) and file.contains(expanded.hi)):
        logger.debug(
            "Skipping span that does not lie within the given file",
            extra={"span": expanded.format(), "source_file": file.name.format()},
        )
        return None

    # Containment above keeps both bounds resolvable; these are the backstop.
    start = line_and_byte_column(file, expanded.lo)
    if start is None:
        return None
    end = line_and_byte_column(file, expanded.hi)
    if end is None:
        return None
    start_line, start_col = start
    end_line, end_col = end

    start_line = doctest_adjusted_line(source_map, file, start_line)
    end_line = doctest_adjusted_line(source_map, file, end_line)
    return check_source_region(
        SourceRegion(
            start_line=start_line,
            start_col=start_col,
            end_line=end_line,
            end_col=end_col,
        ),
        policy,
    )


def make_source_regions(
    source_map: SourceMap,
    file: SourceFile,
    spans: Iterable[Span],
    policy: RegionCheckPolicy | None = None,
) -> list[SourceRegion]:
    if policy is None:
        policy = default_policy()
    regions = {make_source_region(source_map, file, s, policy) for s in spans}
    regions.discard(None)
    return sorted(regions)
