"""
Component template compiler.

Walks the parsed component tree depth-first (pre-order) and rewrites
directive-bearing elements into Twig:

- ``v-show`` is aliased to ``v-if``
- ``v-if`` / ``v-else-if`` / ``v-else`` become if/elseif/else/endif tags
- ``v-on:*`` / ``@*`` event handlers are dropped
- ``v-for`` becomes a for/endfor pair
- ``v-bind:*`` / ``:*`` become plain attributes with ``{{ }}`` values
- registered child components become ``{% include %}`` tags

Each element is handled in two phases: an :class:`ElementEdits` plan is
computed from the element's attributes without touching the tree, then the
plan is applied. Children are visited from a snapshot taken after the
element's own edits.

Entry points:
    ``Compiler(document).convert() -> str``
    ``compile_template(source) -> str``
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from bs4 import BeautifulSoup, Comment, NavigableString, Tag

from vue2twig.core.bindings import extract_binding_value, merge_static, render_binding
from vue2twig.core.builder import Property, TwigBuilder
from vue2twig.core.chains import ChainMode, make_tracker
from vue2twig.core.errors import StructuralError, make_chain_error, make_directive_error
from vue2twig.core.expressions import rewrite_condition, split_interpolations
from vue2twig.core.finisher import replace_placeholders
from vue2twig.core.markup import (
    TEMPLATE_TAG,
    ControlText,
    describe,
    find_template,
    is_plain_text,
    parse_component,
    root_nodes,
    serialize,
)

logger = logging.getLogger(__name__)

DIRECTIVE_IF = "v-if"
DIRECTIVE_ELSE_IF = "v-else-if"
DIRECTIVE_ELSE = "v-else"
DIRECTIVE_SHOW = "v-show"
DIRECTIVE_FOR = "v-for"

CONDITIONAL_DIRECTIVES = (DIRECTIVE_IF, DIRECTIVE_ELSE_IF, DIRECTIVE_ELSE)
BIND_PREFIXES = ("v-bind:", ":")
EVENT_PREFIXES = ("v-on:", "@")

FOR_SEPARATOR = " in "
LOOP_INDEX = "loop.index0"


@dataclass
class ElementEdits:
    """Changes planned for one element.

    Attributes:
        attrs: Final attribute mapping of the element
        before: Control tags to insert before the element, outermost first
        after: Control tags to insert after the element, innermost first
        chain_rewrite: (cursor, continuation) pair replacing an open endif
        chain_closer: The endif that becomes the chain cursor
        replacement: Node replacing the element entirely
    """

    attrs: dict[str, str]
    before: list[ControlText] = field(default_factory=list)
    after: list[ControlText] = field(default_factory=list)
    chain_rewrite: tuple[ControlText, ControlText] | None = None
    chain_closer: ControlText | None = None
    replacement: ControlText | None = None


class Compiler:
    """Converts one component document into Twig.

    A compiler instance owns the conditional-chain state of a single walk;
    create a new one per document.
    """

    def __init__(
        self,
        document: BeautifulSoup,
        builder: TwigBuilder | None = None,
        *,
        chain_mode: ChainMode | str = ChainMode.SCOPED,
        rewrite_interpolations: bool = True,
        convert_comments: bool = False,
        components: Mapping[str, str] | None = None,
        defaults: Mapping[str, str] | None = None,
        header: str | None = None,
    ) -> None:
        self.document = document
        self.builder = builder or TwigBuilder()
        self.chain_mode = ChainMode(chain_mode)
        self.rewrite_interpolations = rewrite_interpolations
        self.convert_comments = convert_comments
        self.defaults = dict(defaults or {})
        self.header = header
        self._chains = make_tracker(self.chain_mode)
        self._components: dict[str, str] = {}
        for name, path in (components or {}).items():
            self.register_component(name, path)

        logger.debug("New compiler instance (chain mode: %s)", self.chain_mode)

    def register_component(self, name: str, path: str) -> None:
        """Render elements named ``name`` as an include of ``path``."""
        self._components[_component_key(name)] = path

    # -- entry points ------------------------------------------------------

    def convert(self) -> str:
        """Convert the document and return the Twig source.

        Raises:
            StructuralError: No <template>, or not exactly one non-text child
                (comments count) with an element as that child.
            ChainStateError: v-else-if / v-else without an open v-if group.
            MalformedDirectiveError: Unparseable v-for or binding name.
        """
        container = find_template(self.document)
        if container is None:
            raise StructuralError("The template file does not contain a template tag")

        roots = root_nodes(container)
        if len(roots) > 1:
            raise StructuralError(
                f"Template should have only one root node, found multiple root nodes: "
                f"{', '.join(describe(root) for root in roots)}"
            )
        if not roots or not isinstance(roots[0], Tag):
            raise StructuralError("Template has no root node")

        self.transform(roots[0])

        body = serialize(container).strip()
        preamble = self._preamble()
        if preamble:
            body = preamble + "\n" + body
        return replace_placeholders(body, self.builder.options.tag_variable)

    def transform(self, node: Tag | NavigableString) -> Tag | NavigableString:
        """Rewrite ``node`` and its subtree in place and return it.

        Non-element nodes are returned unchanged.
        """
        if not isinstance(node, Tag):
            return node

        edits = self._plan(node)
        self._apply(node, edits)
        if edits.replacement is not None:
            return node

        for child in list(node.children):
            if isinstance(child, Tag):
                self.transform(child)
            else:
                self._transform_text(child)

        # <template> wrappers render only their children
        if node.name == TEMPLATE_TAG and not node.attrs and node.parent is not None:
            node.unwrap()

        return node

    # -- planning ----------------------------------------------------------

    def _plan(self, element: Tag) -> ElementEdits:
        edits = ElementEdits(attrs=dict(element.attrs))
        self._plan_show(edits)
        self._plan_condition(element, edits)
        self._plan_events(edits)
        self._plan_for(element, edits)

        path = self._components.get(_component_key(element.name))
        if path is not None:
            self._plan_include(element, path, edits)
        else:
            self._plan_bindings(element, edits)
        return edits

    def _plan_show(self, edits: ElementEdits) -> None:
        attrs = edits.attrs
        show = attrs.pop(DIRECTIVE_SHOW, None)
        if show is None:
            return
        if DIRECTIVE_IF in attrs:
            attrs[DIRECTIVE_IF] = f"({attrs[DIRECTIVE_IF]}) and ({show})"
        else:
            attrs[DIRECTIVE_IF] = show

    def _plan_condition(self, element: Tag, edits: ElementEdits) -> None:
        present = [name for name in CONDITIONAL_DIRECTIVES if name in edits.attrs]
        if not present:
            return

        directive = present[0]
        values = {name: edits.attrs.pop(name) for name in present}
        for ignored in present[1:]:
            logger.warning("<%s>: %s ignored, %s takes precedence", element.name, ignored, directive)

        condition = values[directive]
        if directive == DIRECTIVE_IF:
            edits.before.append(ControlText(self.builder.create_if(condition)))
        else:
            cursor = self._chains.cursor_for(element)
            if cursor is None:
                raise make_chain_error(
                    f"{directive} must directly follow an element with v-if or v-else-if",
                    element.name,
                    directive,
                    condition,
                )
            if directive == DIRECTIVE_ELSE_IF:
                continuation = self.builder.create_else_if(condition)
            else:
                continuation = self.builder.create_else()
            edits.chain_rewrite = (cursor, ControlText(continuation))

        closer = ControlText(self.builder.create_end_if())
        edits.after.append(closer)
        edits.chain_closer = closer

    def _plan_events(self, edits: ElementEdits) -> None:
        for name in list(edits.attrs):
            if name.startswith(EVENT_PREFIXES):
                logger.debug("- strip event handler: %s", name)
                del edits.attrs[name]

    def _plan_for(self, element: Tag, edits: ElementEdits) -> None:
        value = edits.attrs.pop(DIRECTIVE_FOR, None)
        if value is None:
            return

        left, separator, list_expr = value.partition(FOR_SEPARATOR)
        if not separator or not left.strip() or not list_expr.strip():
            raise make_directive_error(
                "v-for expects 'item in list'", element.name, DIRECTIVE_FOR, value
            )

        names = [name.strip() for name in left.strip().strip("()").split(",")]
        if len(names) > 3 or not all(names):
            raise make_directive_error(
                "v-for binds at most (value, key, index)", element.name, DIRECTIVE_FOR, value
            )

        source = _loop_source(list_expr.strip(), self.builder)
        if len(names) == 1:
            opening = self.builder.create_for(source, item=names[0])
        else:
            # Twig binds the key before the value
            opening = self.builder.create_for(source, item=names[0], key=names[1])
        if len(names) == 3:
            opening += " " + self.builder.create_variable(names[2], LOOP_INDEX)

        edits.before.append(ControlText(opening))
        edits.after.insert(0, ControlText(self.builder.create_end_for()))

    def _plan_bindings(self, element: Tag, edits: ElementEdits) -> None:
        source = edits.attrs
        attrs: dict[str, str] = {}

        for attribute, value in source.items():
            name = _binding_name(element, attribute, value)
            if name is None:
                logger.debug("- skip: %s", attribute)
                attrs.setdefault(attribute, value)
                continue

            logger.debug("- handle: %s = %s", name, value)
            if name == "key":
                pass
            elif name in ("class", "style"):
                bound = render_binding(name, extract_binding_value(value), self.builder.replacements)
                attrs[name] = merge_static(name, source.get(name), bound)
            elif value == "true":
                attrs[name] = name
            else:
                attrs[name] = render_binding(name, extract_binding_value(value), self.builder.replacements)
            logger.debug("=> remove %s", attribute)

        edits.attrs = attrs

    def _plan_include(self, element: Tag, path: str, edits: ElementEdits) -> None:
        properties: list[Property] = []
        for attribute, value in edits.attrs.items():
            name = _binding_name(element, attribute, value)
            if name is not None:
                expression = rewrite_condition(value, self.builder.replacements)
                properties.append(Property(name=name, value=expression, is_binding=True))
            elif attribute.startswith("v-"):
                logger.debug("- skip: %s", attribute)
            elif value == "":
                properties.append(Property(name=attribute, value="true"))
            else:
                properties.append(Property(name=attribute, value=_string_literal(value)))

        if any(not (is_plain_text(child) and not child.strip()) for child in element.children):
            logger.warning("<%s>: component content is not rendered by includes", element.name)

        edits.attrs = {}
        edits.replacement = ControlText(self.builder.create_include_partial(path, properties))

    # -- applying ----------------------------------------------------------

    def _apply(self, element: Tag, edits: ElementEdits) -> None:
        element.attrs = edits.attrs

        if edits.chain_rewrite is not None:
            cursor, continuation = edits.chain_rewrite
            cursor.replace_with(continuation)
        if edits.before:
            element.insert_before(*edits.before)
        if edits.after:
            element.insert_after(*edits.after)

        if edits.chain_closer is not None:
            self._chains.open(element, edits.chain_closer)
        else:
            self._chains.interrupt(element)

        if edits.replacement is not None:
            element.replace_with(edits.replacement)

    def _transform_text(self, node: NavigableString) -> None:
        if isinstance(node, Comment):
            if self.convert_comments:
                node.replace_with(ControlText(self.builder.create_comment(node.strip())))
            return

        if not (self.rewrite_interpolations and is_plain_text(node) and "{{" in node):
            return

        segments = split_interpolations(
            str(node), self.builder.replacements, self.builder.options.tag_variable
        )
        if not any(is_span for _, is_span in segments):
            return
        node.replace_with(
            *(ControlText(text) if is_span else NavigableString(text) for text, is_span in segments)
        )

    def _preamble(self) -> str:
        parts: list[str] = []
        if self.header:
            lines = self.header.splitlines()
            if len(lines) > 1:
                parts.append(self.builder.create_multiline_comment(lines))
            else:
                parts.append(self.builder.create_comment(self.header))
        for name, value in self.defaults.items():
            parts.append(self.builder.create_default_for_variable(name, value))
        return "\n".join(parts)


def compile_template(
    source: str,
    builder: TwigBuilder | None = None,
    **options: Any,
) -> str:
    """Convert single-file component source into Twig.

    Args:
        source: Component source containing a ``<template>`` element.
        builder: Builder carrying the delimiter configuration.
        **options: Keyword options of :class:`Compiler`.

    Returns:
        The Twig template text.
    """
    document = parse_component(source)
    return Compiler(document, builder, **options).convert()


def _binding_name(element: Tag, attribute: str, value: str) -> str | None:
    """Attribute name a binding sets, or None if ``attribute`` is not a binding."""
    for prefix in BIND_PREFIXES:
        if attribute.startswith(prefix):
            # modifiers: ":view-box.camel"
            name = attribute[len(prefix) :].split(".", 1)[0]
            if not name:
                raise make_directive_error(
                    "Binding has no attribute name", element.name, attribute, value
                )
            return name
    return None


def _loop_source(list_expr: str, builder: TwigBuilder) -> str:
    # "n in 10" iterates 1..10
    if list_expr.isdigit():
        return f"1..{list_expr}"
    return rewrite_condition(list_expr, builder.replacements)


def _component_key(name: str) -> str:
    return name.replace("-", "").lower()


def _string_literal(value: str) -> str:
    return "'" + value.replace("\\", "\\\\").replace("'", "\\'") + "'"
