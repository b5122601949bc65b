"""Slim template parsing and the per-file parse cache."""

from parse.cache import ParserCache
from parse.nodes import LINE_BREAK, Call, Container, LineBreak, Node, Static
from parse.slim import SlimParser, TemplateSyntaxError, parse_template

__all__ = [
    "LINE_BREAK",
    "Call",
    "Container",
    "LineBreak",
    "Node",
    "ParserCache",
    "SlimParser",
    "Static",
    "TemplateSyntaxError",
    "parse_template",
]
