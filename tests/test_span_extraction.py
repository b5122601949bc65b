from __future__ import annotations

from pathlib import Path

import pytest

from extract.span import (
    SourceSpan,
    body_line_count,
    count_line_breaks,
    count_source_lines,
    dedent_line,
    read_span,
)
from parse.nodes import LINE_BREAK, Call, Container, Static


def _write_numbered_file(tmp_path: Path, count: int = 10) -> Path:
    path = tmp_path / "numbered.slim"
    path.write_text("".join(f"  line {i}\n" for i in range(count)), encoding="utf-8")
    return path


def _call_with_breaks(count: int) -> Call:
    # Spread the markers over several nesting levels.
    inner = Container("tag", [Container(children=[LINE_BREAK] * (count // 2))])
    return Call(
        "output",
        "kss_block '1.1' do",
        [LINE_BREAK] * (count - count // 2) + [inner, Static("text")],
    )


def test_count_line_breaks_visits_every_depth() -> None:
    nodes = [
        LINE_BREAK,
        Container(
            "tag",
            [
                Container(children=[LINE_BREAK, Static("x"), LINE_BREAK]),
                Call("output", "foo", [LINE_BREAK, Container("text", [LINE_BREAK])]),
            ],
        ),
        Static("y"),
    ]

    assert count_line_breaks(nodes) == 5


@pytest.mark.parametrize(("markers", "expected"), [(7, 6), (3, 2), (2, 1), (1, 0)])
def test_body_line_count_excludes_invocation_line(markers: int, expected: int) -> None:
    assert body_line_count(_call_with_breaks(markers)) == expected


def test_body_line_count_saturates_at_zero_without_markers() -> None:
    call = Call("output", "kss_block '1.1' do", [Static("inline")])

    assert count_line_breaks(call.children) == 0
    assert body_line_count(call) == 0


def test_body_line_count_includes_wrapped_call_lines() -> None:
    swatch = Call("output", "kss_swatch 'red',\n'#ff3322'", [LINE_BREAK])
    call = Call("output", "kss_block '1.1' do", [LINE_BREAK, swatch])

    assert count_line_breaks(call.children) == 2
    assert count_source_lines(call.children) == 3
    assert body_line_count(call) == 2


def test_source_span_rejects_negative_values() -> None:
    with pytest.raises(ValueError, match="start_line"):
        SourceSpan(-1, 2)
    with pytest.raises(ValueError, match="line_count"):
        SourceSpan(0, -1)

    assert SourceSpan(2, 3).stop == 5


def test_read_span_returns_exact_slice(tmp_path: Path) -> None:
    path = _write_numbered_file(tmp_path)

    assert read_span(path, SourceSpan(2, 3)) == "line 2\nline 3\nline 4\n"


def test_read_span_truncates_at_end_of_file(tmp_path: Path) -> None:
    path = _write_numbered_file(tmp_path)

    assert read_span(path, SourceSpan(8, 100)) == "line 8\nline 9\n"
    assert read_span(path, SourceSpan(20, 3)) == ""


def test_read_span_with_zero_lines_is_empty(tmp_path: Path) -> None:
    path = _write_numbered_file(tmp_path)

    assert read_span(path, SourceSpan(4, 0)) == ""


def test_read_span_preserves_line_terminators(tmp_path: Path) -> None:
    path = tmp_path / "crlf.slim"
    path.write_bytes(b"= kss_block '1.1' do\r\n  p One\r\n  p Two")

    assert read_span(path, SourceSpan(1, 5)) == "p One\r\np Two"


def test_read_span_custom_indent_width(tmp_path: Path) -> None:
    path = tmp_path / "wide.slim"
    path.write_text("= kss_block '1.1' do\n    p Four\n      | six\n", encoding="utf-8")

    assert read_span(path, SourceSpan(1, 2), indent_width=4) == "p Four\n  | six\n"


@pytest.mark.parametrize(
    ("line", "expected"),
    [
        ("  div\n", "div\n"),
        ("      deep\n", "    deep\n"),
        ("\t\ttabbed\n", "tabbed\n"),
        ("\tone tab\n", "\tone tab\n"),
        (" single\n", " single\n"),
        ("flush\n", "flush\n"),
        ("  \n", "\n"),
        (" \n", " \n"),
        ("\n", "\n"),
    ],
)
def test_dedent_line_strips_exactly_one_level(line: str, expected: str) -> None:
    assert dedent_line(line) == expected
