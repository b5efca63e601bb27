from __future__ import annotations

import pytest

from covspan import FileName, SourceFile, SourceMap, Span, SpanSnippetError


def test_line_starts_are_byte_offsets() -> None:
    sf = SourceFile.from_text("a.rs", "é\nab\n\nx")
    # "é" is two bytes in UTF-8.
    assert sf.lines == (0, 3, 6, 7)
    assert sf.end_pos == 8


def test_lookup_line_uses_greatest_start_not_exceeding_position() -> None:
    sf = SourceFile(name=FileName("a.rs"), src=b"x" * 30, start_pos=0, lines=(0, 10, 25))
    assert sf.lookup_line(0) == 0
    assert sf.lookup_line(9) == 0
    assert sf.lookup_line(10) == 1
    assert sf.lookup_line(24) == 1
    assert sf.lookup_line(30) == 2
    assert sf.lookup_line(31) is None
    assert sf.lookup_line(-1) is None


@pytest.mark.parametrize("lines", [(), (1, 5), (0, 5, 5), (0, 7, 3), (0, 10, 25)])
def test_malformed_line_table_is_rejected(lines: tuple[int, ...]) -> None:
    with pytest.raises(ValueError):
        SourceFile(name=FileName("a.rs"), src=b"", start_pos=0, lines=lines)


def test_files_do_not_share_positions() -> None:
    sm = SourceMap()
    a = sm.new_source_file("a.rs", "abc")
    b = sm.new_source_file("b.rs", "def")
    assert a.start_pos == 0 and a.end_pos == 3
    assert b.start_pos == 4
    assert sm.lookup_source_file(3) is a
    assert sm.lookup_source_file(4) is b
    assert sm.lookup_source_file(8) is None


def test_duplicate_file_name_is_rejected() -> None:
    sm = SourceMap()
    sm.new_source_file("a.rs", "abc")
    with pytest.raises(ValueError):
        sm.new_source_file(FileName("a.rs"), "xyz")


def test_span_to_source_passes_relative_bounds() -> None:
    sm = SourceMap()
    sm.new_source_file("a.rs", "abc")
    sm.new_source_file("b.rs", "hello")
    got = sm.span_to_source(Span(5, 8), lambda src, start, end: src[start:end])
    assert got == b"ell"


def test_span_to_source_rejects_cross_file_span() -> None:
    sm = SourceMap()
    sm.new_source_file("a.rs", "abc")
    sm.new_source_file("b.rs", "def")
    with pytest.raises(SpanSnippetError) as e:
        sm.span_to_source(Span(1, 6), lambda src, start, end: None)
    assert "a.rs" in str(e.value)


def test_doctest_offset_line() -> None:
    sm = SourceMap()
    plain = FileName("lib.rs")
    doctest = FileName("lib.rs", doctest_line_offset=40)
    assert sm.doctest_offset_line(plain, 3) == 3
    assert sm.doctest_offset_line(doctest, 3) == 43


def test_span_bounds_are_validated() -> None:
    with pytest.raises(ValueError):
        Span(5, 4)
    with pytest.raises(ValueError):
        Span(-1, 4)
    assert Span(3, 3).grow_hi_by_one_byte() == Span(3, 4)
    assert Span(3, 3).grow_lo_by_one_byte() == Span(2, 3)


def test_line_table_must_fit_the_source() -> None:
    with pytest.raises(ValueError) as e:
        SourceFile(name=FileName("m.rs"), src=b"x" * 24, start_pos=0, lines=(0, 10, 25))
    assert "past the end" in str(e.value)
    # A line may start exactly at end-of-file, after a trailing newline.
    sf = SourceFile(name=FileName("m.rs"), src=b"x" * 24 + b"\n", start_pos=0, lines=(0, 10, 25))
    assert sf.lookup_line(25) == 2


def test_lookup_source_file_after_many_files() -> None:
    sm = SourceMap()
    files = [sm.new_source_file(f"f{i}.rs", "ab\n") for i in range(20)]
    for sf in files:
        assert sm.lookup_source_file(sf.start_pos) is sf
        assert sm.lookup_source_file(sf.end_pos) is sf
