"""
Markup adapter over BeautifulSoup.

Parsing and serialization are delegated to BeautifulSoup with the stdlib
``html.parser`` backend. This module only decides what the compiler sees:
the template container, its root node, the node type used for synthesized
Twig control tags, and how the tree is written back out.
"""

from __future__ import annotations

import logging
import re

from bs4 import BeautifulSoup, Comment, NavigableString, Tag
from bs4.dammit import EntitySubstitution
from bs4.element import PreformattedString
from bs4.formatter import HTMLFormatter

from vue2twig.core.finisher import DOUBLE_CURLY_CLOSE, DOUBLE_CURLY_OPEN

logger = logging.getLogger(__name__)

TEMPLATE_TAG = "template"

_PLACEHOLDER_RE = re.compile(
    f"({re.escape(DOUBLE_CURLY_OPEN)}.*?{re.escape(DOUBLE_CURLY_CLOSE)})", re.DOTALL
)


class ControlText(PreformattedString):
    """A synthesized Twig tag.

    Serialized verbatim: entity substitution would turn ``a > b`` inside
    ``{% if %}`` into ``a &gt; b``.
    """

    PREFIX = ""
    SUFFIX = ""


class TwigFormatter(HTMLFormatter):
    """The "minimal" HTML formatter, adjusted for Twig output.

    Attributes are written in source order, and bound expressions between
    placeholder sentinels are written without entity substitution.
    """

    def __init__(self) -> None:
        super().__init__(entity_substitution=EntitySubstitution.substitute_xml)

    def attributes(self, tag: Tag) -> list[tuple[str, str | None]]:
        if tag.attrs is None:
            return []
        return list(tag.attrs.items())

    def attribute_value(self, value: str) -> str:
        parts = _PLACEHOLDER_RE.split(value)
        # odd indices are the captured placeholder spans
        return "".join(
            part if index % 2 else self.substitute(part) for index, part in enumerate(parts)
        )


TWIG_FORMATTER = TwigFormatter()


def parse_component(source: str) -> BeautifulSoup:
    """Parse single-file component source into a document tree."""
    # every attribute stays a plain string, including class, and text inside
    # <template> is plain NavigableString rather than TemplateString
    return BeautifulSoup(
        source,
        "html.parser",
        multi_valued_attributes=None,
        string_containers={},
    )


def find_template(document: BeautifulSoup) -> Tag | None:
    """Return the outermost ``<template>`` element, if any."""
    return document.find(TEMPLATE_TAG)


def root_nodes(container: Tag) -> list[Tag | NavigableString]:
    """Non-text children of the template container.

    Elements and comments both count; only text (including whitespace) is
    skipped. Other node kinds (doctype, processing instructions) are logged
    and counted as well.
    """
    nodes: list[Tag | NavigableString] = []
    for child in container.children:
        if is_plain_text(child):
            continue
        if not isinstance(child, Tag | Comment):
            logger.warning("Unexpected %s node in <template>: %r", type(child).__name__, str(child))
        nodes.append(child)
    return nodes


def describe(node: Tag | NavigableString) -> str:
    """Short label for a node in error messages: ``<div>`` or ``comment``."""
    if isinstance(node, Tag):
        return f"<{node.name}>"
    return type(node).__name__.lower()


def serialize(container: Tag) -> str:
    """Serialize the children of ``container`` (not the container itself)."""
    return container.decode_contents(formatter=TWIG_FORMATTER)


def is_blank(node: object) -> bool:
    """True for whitespace-only text and for HTML comments."""
    if isinstance(node, Comment):
        return True
    return is_plain_text(node) and not node.strip()


def is_plain_text(node: object) -> bool:
    """True for text that came from the source, as opposed to synthesized tags.

    Comments, doctypes and :class:`ControlText` are all preformatted strings
    and are excluded.
    """
    return isinstance(node, NavigableString) and not isinstance(node, PreformattedString)
