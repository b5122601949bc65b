from __future__ import annotations

from pathlib import Path

import pytest

from extract.engine import SourceExtractor
from extract.errors import CallSiteNotFound, ExtractionError
from parse.cache import ParserCache
from parse.slim import TemplateSyntaxError

FIXTURES = Path(__file__).parent / "fixtures" / "styleguide"

DOCUMENTED = """\
/ Buttons
/ Styleguide 1.1

= kss_block '1.1' do
  div.example
    | Example markup
  .foo
    = "#{'bar'}"
  #baz
  | xyz
"""


def _write_template(root: Path, name: str, source: str) -> Path:
    path = root / name
    path.write_text(source, encoding="utf-8")
    return path


def test_extracts_block_body_with_one_indent_level_removed(tmp_path: Path) -> None:
    path = _write_template(
        tmp_path, "simple.slim", "= kss_block '1.1' do\n  div.example\n    | Hello\n"
    )

    source = SourceExtractor().extract(path, 1, "kss_block", "1.1")

    assert source == "div.example\n  | Hello\n"


def test_extracts_mixed_body_after_leading_comments(tmp_path: Path) -> None:
    path = _write_template(tmp_path, "documented.slim", DOCUMENTED)
    extractor = SourceExtractor()

    span = extractor.locate_span(path, 4, "kss_block", "1.1")
    source = extractor.extract(path, 4, "kss_block", "1.1")

    assert (span.start_line, span.line_count) == (4, 6)
    assert source == (
        "div.example\n"
        "  | Example markup\n"
        ".foo\n"
        "  = \"#{'bar'}\"\n"
        "#baz\n"
        "| xyz\n"
    )


@pytest.mark.parametrize(
    ("section", "start", "expected"),
    [
        ("1.1", 3, "button.btn\n  | Default\n\n"),
        (
            "1.2",
            7,
            "button.btn.btn--primary\n"
            "  | Primary\n"
            'button.btn.btn--primary disabled="disabled"\n'
            "  | Disabled\n",
        ),
    ],
)
def test_extracts_each_block_of_fixture(section: str, start: int, expected: str) -> None:
    source = SourceExtractor().extract(FIXTURES / "buttons.slim", start, "kss_block", section)

    assert source == expected


def test_body_lines_stay_in_order_for_output_calls() -> None:
    source = SourceExtractor().extract(FIXTURES / "colors.slim", 1, "kss_block", "2.1")

    assert source == (
        "= kss_swatch 'red', '#ff3322', description: 'for error text'\n"
        "= kss_swatch 'blue', '#3322ff'\n"
    )


def test_missing_call_site_raises_distinct_error(tmp_path: Path) -> None:
    path = _write_template(tmp_path, "page.slim", "= kss_block '1.1' do\n  p Hi\n")

    with pytest.raises(CallSiteNotFound) as exc_info:
        SourceExtractor().extract(path, 1, "kss_block", "4.2")

    error = exc_info.value
    assert isinstance(error, ExtractionError)
    assert error.path == str(path)
    assert error.method_name == "kss_block"
    assert error.argument == "4.2"
    assert "kss_block '4.2'" in str(error)


def test_injected_cache_is_reused_across_requests(tmp_path: Path) -> None:
    path = _write_template(
        tmp_path,
        "page.slim",
        "= kss_block '1.1' do\n  p One\n= kss_block '1.2' do\n  p Two\n",
    )
    cache = ParserCache()
    extractor = SourceExtractor(cache)

    assert extractor.extract(path, 1, "kss_block", "1.1") == "p One\n"
    assert extractor.extract(path, 3, "kss_block", "1.2") == "p Two\n"
    assert extractor.cache is cache
    assert len(cache) == 1


def test_raw_lines_are_reread_while_tree_stays_cached(tmp_path: Path) -> None:
    path = _write_template(tmp_path, "page.slim", "= kss_block '1.1' do\n  p One\n")
    extractor = SourceExtractor()
    extractor.extract(path, 1, "kss_block", "1.1")

    path.write_text("= kss_block '1.1' do\n  p Changed\n  p Extra\n", encoding="utf-8")

    # The cached tree still spans one body line.
    assert extractor.extract(path, 1, "kss_block", "1.1") == "p Changed\n"


def test_start_line_past_end_of_file_yields_empty_source(tmp_path: Path) -> None:
    path = _write_template(tmp_path, "page.slim", "= kss_block '1.1' do\n  p One\n")

    assert SourceExtractor().extract(path, 40, "kss_block", "1.1") == ""


def test_parse_failure_propagates(tmp_path: Path) -> None:
    path = _write_template(tmp_path, "broken.slim", "= kss_block '1.1' do\n%oops\n")

    with pytest.raises(TemplateSyntaxError):
        SourceExtractor().extract(path, 1, "kss_block", "1.1")


def test_read_failure_propagates(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        SourceExtractor().extract(tmp_path / "missing.slim", 1, "kss_block", "1.1")
