"""Command-line interface for styleguide source extraction."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import orjson

from extract.engine import SourceExtractor
from extract.errors import CallSiteNotFound
from extract.locate import CallSiteQuery, find_call_site, iter_call_sites
from extract.span import body_line_count
from parse.slim import TemplateSyntaxError
from styleguide.config import ConfigError, StyleguideConfig, load_config


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="styleguide")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    extract_parser = subparsers.add_parser(
        "extract", help="Print the source of one documented block"
    )
    extract_parser.add_argument("template", help="Template file")
    extract_parser.add_argument(
        "--section", required=True, help="Section reference, e.g. 1.1"
    )
    extract_parser.add_argument(
        "--line",
        type=int,
        default=None,
        help="0-indexed line where the block body starts (default: from the template)",
    )
    extract_parser.add_argument(
        "--method",
        default=None,
        help="Documentation call name (default: config method_name)",
    )
    extract_parser.add_argument(
        "--config-root",
        default=None,
        help="Directory holding styleguide.toml (default: template directory)",
    )
    extract_parser.add_argument(
        "--json", action="store_true", help="Print a JSON record instead of source"
    )

    blocks_parser = subparsers.add_parser(
        "blocks", help="List documented blocks as JSON lines"
    )
    blocks_parser.add_argument("templates", nargs="+", help="Template files")
    blocks_parser.add_argument(
        "--method",
        default=None,
        help="Documentation call name (default: config method_name)",
    )
    blocks_parser.add_argument(
        "--config-root",
        default=".",
        help="Directory holding styleguide.toml (default: .)",
    )

    return parser


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _write_json_line(record: dict[str, object]) -> None:
    sys.stdout.write(orjson.dumps(record).decode("utf-8") + "\n")


def _resolve_start_line(
    extractor: SourceExtractor, template: Path, method: str, section: str
) -> int:
    root = extractor.cache.get(template)
    for site in iter_call_sites(root, method):
        if site.argument == section:
            return site.body_start
    raise CallSiteNotFound(template, method, section)


def _handle_extract(
    template: Path,
    section: str,
    line: int | None,
    method: str | None,
    config: StyleguideConfig,
    as_json: bool,
) -> int:
    method_name = method or config.method_name
    extractor = SourceExtractor(
        indent_width=config.indent_width, encoding=config.encoding
    )
    try:
        if line is None:
            line = _resolve_start_line(extractor, template, method_name, section)
        source = extractor.extract(template, line, method_name, section)
    except (CallSiteNotFound, TemplateSyntaxError) as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 1
    except OSError as exc:
        sys.stderr.write(f"template: {template}\n")
        sys.stderr.write(f"error: {exc}\n")
        return 2

    if not as_json:
        sys.stdout.write(source)
        return 0

    # Served from the parse cache.
    span = extractor.locate_span(template, line, method_name, section)
    _write_json_line(
        {
            "path": str(template),
            "section": section,
            "start_line": span.start_line,
            "line_count": span.line_count,
            "source": source,
        }
    )
    return 0


def _handle_blocks(
    templates: list[str], method: str | None, config: StyleguideConfig
) -> int:
    method_name = method or config.method_name
    extractor = SourceExtractor(
        indent_width=config.indent_width, encoding=config.encoding
    )
    status = 0

    for template in templates:
        try:
            parsed = extractor.cache.get(template)
        except (TemplateSyntaxError, OSError) as exc:
            sys.stderr.write(f"{template}: {exc}\n")
            status = 1
            continue

        for site in iter_call_sites(parsed, method_name):
            # Extraction always resolves a section to its first call.
            first = find_call_site(parsed, CallSiteQuery(method_name, site.argument))
            _write_json_line(
                {
                    "path": template,
                    "section": site.argument,
                    "line": site.line,
                    "line_count": body_line_count(site.call),
                    "shadowed": first is not site.call,
                }
            )

    return status


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    if args.command == "extract":
        template = Path(args.template).expanduser().resolve()
        config_root = (
            Path(args.config_root).expanduser().resolve()
            if args.config_root
            else template.parent
        )
    else:
        config_root = Path(args.config_root).expanduser().resolve()

    try:
        config = load_config(config_root)
    except ConfigError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 2

    if args.command == "extract":
        return _handle_extract(
            template, args.section, args.line, args.method, config, args.json
        )

    if args.command == "blocks":
        return _handle_blocks(args.templates, args.method, config)

    raise AssertionError


if __name__ == "__main__":
    raise SystemExit(main())
