"""
Expression rewriting for embedded component expressions.

Translates the JavaScript-flavoured expressions found in directive values
and ``{{ }}`` interpolations into Twig expression syntax. This is not a
parser: a fixed list of textual rewrites is applied to the parts of an
expression that are outside string literals, and string literals are copied
through untouched.

Usage:
    from vue2twig.core.expressions import rewrite_condition

    rewrite_condition('user && !user.banned')
    # 'user and not user.banned'
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from enum import StrEnum, auto

INTERPOLATION_OPEN = "{{"
INTERPOLATION_CLOSE = "}}"

# Source constant spellings and their Twig equivalents, applied to whole words
REPLACEMENTS: dict[str, str] = {
    "undefined": "null",
}


class ScanState(StrEnum):
    """States of the character scanner.

    ``UNQUOTED`` is plain code for conditions and plain text (outside any
    span) for interpolation scanning. The quote states return to the state
    they were entered from when the matching quote is seen.
    """

    UNQUOTED = auto()
    SINGLE_QUOTE = auto()
    DOUBLE_QUOTE = auto()
    INTERPOLATION = auto()


_QUOTE_STATES: dict[str, ScanState] = {
    "'": ScanState.SINGLE_QUOTE,
    '"': ScanState.DOUBLE_QUOTE,
}

_AND_RE = re.compile(r"\s*&&\s*")
_OR_RE = re.compile(r"\s*\|\|\s*")
# Unary "!" only; "!=" is a comparison
_NOT_RE = re.compile(r"!(?=[^=])\s*")
_LENGTH_RE = re.compile(r"\.length\b")
_TRIM_RE = re.compile(r"\.trim\b")

_TEMPLATE_LITERAL_RE = re.compile(r"`([^`]*)`")
_SUBSTITUTION_RE = re.compile(r"\$\{([^}]*)\}")


def rewrite_condition(text: str, replacements: Mapping[str, str] | None = None) -> str:
    """Rewrite a condition expression into Twig syntax.

    Quoted spans (single or double quotes) are copied byte-for-byte; a quote
    preceded by an unescaped backslash does not close its span. Every
    unquoted run is rewritten when a quote opens or the input ends.

    Args:
        text: Source expression, e.g. ``items.length > 0 && !loading``.
        replacements: Constant spellings to substitute. Defaults to
            :data:`REPLACEMENTS`.

    Returns:
        The rewritten expression, e.g. ``items|length > 0 and not loading``.
    """
    if replacements is None:
        replacements = REPLACEMENTS

    output: list[str] = []
    buffer: list[str] = []
    state = ScanState.UNQUOTED
    escaped = False

    for char in text:
        if state is ScanState.UNQUOTED:
            if char in _QUOTE_STATES:
                output.append(_rewrite_tokens("".join(buffer), replacements))
                buffer.clear()
                output.append(char)
                state = _QUOTE_STATES[char]
            else:
                buffer.append(char)
            continue

        output.append(char)
        if escaped:
            escaped = False
        elif char == "\\":
            escaped = True
        elif _QUOTE_STATES.get(char) is state:
            state = ScanState.UNQUOTED

    if buffer:
        output.append(_rewrite_tokens("".join(buffer), replacements))

    return "".join(output)


def rewrite_interpolation(
    text: str,
    replacements: Mapping[str, str] | None = None,
    delimiters: tuple[str, str] = (INTERPOLATION_OPEN, INTERPOLATION_CLOSE),
) -> str:
    """Rewrite every ``{{ ... }}`` span of a text node.

    See :func:`split_interpolations` for the scanning rules.
    """
    return "".join(segment for segment, _ in split_interpolations(text, replacements, delimiters))


def split_interpolations(
    text: str,
    replacements: Mapping[str, str] | None = None,
    delimiters: tuple[str, str] = (INTERPOLATION_OPEN, INTERPOLATION_CLOSE),
) -> list[tuple[str, bool]]:
    """Split text into prose and rewritten ``{{ ... }}`` spans.

    Text outside spans is copied unchanged (apostrophes in prose are not
    quotes). Inside a span, characters are buffered until an unquoted
    ``}}``; the expression is then flattened (template literals), rewritten
    with :func:`rewrite_condition` and emitted back between the delimiters
    with its surrounding whitespace preserved. Spans are always recognised
    by ``{{`` and ``}}``; ``delimiters`` only sets what the rewritten span is
    written with. An unterminated span is returned as prose, as written.

    Returns:
        ``(segment, is_span)`` pairs in source order. Span segments include
        their delimiters.
    """
    open_tag, close_tag = delimiters
    segments: list[tuple[str, bool]] = []
    prose: list[str] = []
    buffer: list[str] = []
    state = ScanState.UNQUOTED
    escaped = False
    previous = ""

    for char in text:
        if state is ScanState.UNQUOTED:
            if previous + char == INTERPOLATION_OPEN:
                prose.pop()
                if prose:
                    segments.append(("".join(prose), False))
                    prose.clear()
                state = ScanState.INTERPOLATION
                char = ""
            else:
                prose.append(char)
        elif state is ScanState.INTERPOLATION:
            buffer.append(char)
            if char in _QUOTE_STATES:
                state = _QUOTE_STATES[char]
            elif previous + char == INTERPOLATION_CLOSE:
                expression = "".join(buffer[: -len(INTERPOLATION_CLOSE)])
                rewritten = _rewrite_expression(expression, replacements)
                segments.append((open_tag + rewritten + close_tag, True))
                buffer.clear()
                state = ScanState.UNQUOTED
                char = ""
        else:
            buffer.append(char)
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif _QUOTE_STATES.get(char) is state:
                state = ScanState.INTERPOLATION
                char = ""
        previous = char

    if state is not ScanState.UNQUOTED:
        prose.append(INTERPOLATION_OPEN)
        prose.extend(buffer)
    if prose:
        segments.append(("".join(prose), False))

    return segments


def flatten_template_literals(text: str) -> str:
    """Turn back-tick template literals into Twig string concatenation.

    The literal `` `Hello ${user.name}!` `` becomes
    ``'Hello ' ~ user.name ~ '!'``.
    """
    return _TEMPLATE_LITERAL_RE.sub(_flatten_literal, text)


def _flatten_literal(match: re.Match[str]) -> str:
    body = match.group(1)
    parts: list[str] = []
    has_literal = False
    position = 0

    for substitution in _SUBSTITUTION_RE.finditer(body):
        literal = body[position : substitution.start()]
        if literal:
            parts.append(_quote(literal))
            has_literal = True
        parts.append(substitution.group(1).strip())
        position = substitution.end()

    tail = body[position:]
    if tail:
        parts.append(_quote(tail))
        has_literal = True

    # keep string semantics for `${a}${b}`
    if not has_literal:
        parts.insert(0, "''")

    return " ~ ".join(parts)


def _quote(literal: str) -> str:
    return "'" + literal.replace("'", "\\'") + "'"


def _rewrite_expression(expression: str, replacements: Mapping[str, str] | None) -> str:
    return rewrite_condition(flatten_template_literals(expression), replacements)


def _rewrite_tokens(run: str, replacements: Mapping[str, str]) -> str:
    """Apply the operator and constant rewrites to an unquoted run."""
    run = run.replace("===", "==")
    run = run.replace("!==", "!=")
    run = _AND_RE.sub(" and ", run)
    run = _OR_RE.sub(" or ", run)
    run = _NOT_RE.sub("not ", run)
    run = _LENGTH_RE.sub("|length", run)
    run = _TRIM_RE.sub("|trim", run)

    for source, target in replacements.items():
        run = re.sub(rf"\b{re.escape(source)}\b", target, run)

    return run
