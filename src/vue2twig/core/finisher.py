"""
Post-serialization placeholder substitution.

Bound attribute values are written with sentinel delimiters so the markup
serializer never sees Twig's ``{{ }}``; the sentinels are swapped for the
real delimiters once the tree has been turned back into text.
"""

from __future__ import annotations

DOUBLE_CURLY_OPEN = "__DOUBLE_CURLY_OPEN__"
DOUBLE_CURLY_CLOSE = "__DOUBLE_CURLY_CLOSE__"


def wrap_placeholder(expression: str) -> str:
    """Wrap an expression in sentinel delimiters for an attribute value."""
    return f"{DOUBLE_CURLY_OPEN} {expression} {DOUBLE_CURLY_CLOSE}"


def replace_placeholders(text: str, delimiters: tuple[str, str] = ("{{", "}}")) -> str:
    """Replace sentinel tokens with the literal variable delimiters."""
    open_tag, close_tag = delimiters
    text = text.replace(DOUBLE_CURLY_OPEN, open_tag)
    return text.replace(DOUBLE_CURLY_CLOSE, close_tag)
