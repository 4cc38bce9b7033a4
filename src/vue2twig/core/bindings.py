"""
Attribute-binding values.

A bound attribute (``:title="user.name"``) carries either a raw expression
or, for ``class`` and ``style``, a mapping of name to truthiness. The
mapping form is rendered statically; the attribute extraction step only
ever produces raw expressions today.
"""

from __future__ import annotations

import re
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field

from vue2twig.core.expressions import rewrite_condition
from vue2twig.core.finisher import wrap_placeholder

_UPPER_RE = re.compile(r"([A-Z])")


class RawExpression(BaseModel):
    """An expression bound verbatim: ``:title="user.name"``."""

    expression: str = Field(description="Source expression")

    model_config = ConfigDict(frozen=True)


class TruthMap(BaseModel):
    """
    A decomposed object binding for ``class`` or ``style``.

    Examples:
        - class: {"active": True, "hidden": False} → "active"
        - style: {"fontSize": "12px", "color": ""} → "font-size:12px"
    """

    entries: dict[str, str | bool] = Field(description="Name to setting")

    model_config = ConfigDict(frozen=True)


BindingValue = RawExpression | TruthMap


def extract_binding_value(raw: str) -> BindingValue:
    """Classify a bound attribute value."""
    # TODO: parse object-literal class/style bindings ({ active: isActive }) into TruthMap
    return RawExpression(expression=raw)


def flatten_style(entries: Mapping[str, str | bool]) -> str:
    """Join truthy style settings as ``kebab-prop:value`` pairs."""
    styles = []
    for prop, setting in entries.items():
        if setting:
            prop = _UPPER_RE.sub(r"-\1", prop).lower()
            styles.append(f"{prop}:{setting}")
    return ";".join(styles)


def flatten_class(entries: Mapping[str, str | bool]) -> str:
    """Join the class names whose setting is truthy."""
    return " ".join(name for name, setting in entries.items() if setting)


def render_binding(
    name: str,
    value: BindingValue,
    replacements: Mapping[str, str] | None = None,
) -> str:
    """Render a binding as the attribute value to write on the element."""
    if isinstance(value, TruthMap):
        if name == "style":
            return flatten_style(value.entries)
        if name == "class":
            return flatten_class(value.entries)
        raise ValueError(f"Object bindings are only supported for class and style, not {name!r}")
    return wrap_placeholder(rewrite_condition(value.expression, replacements))


def merge_static(name: str, static: str | None, bound: str) -> str:
    """Combine a static class/style attribute with its bound counterpart."""
    if not static:
        return bound
    if name == "style":
        return static.rstrip().rstrip(";") + "; " + bound
    return f"{static} {bound}"
