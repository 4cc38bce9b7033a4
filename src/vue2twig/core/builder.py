"""
Twig text builder.

Renders control-flow, variable and comment intents into literal Twig
markup. The builder holds no state besides its delimiter configuration,
so one instance can serve any number of conversions.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from pydantic import BaseModel, ConfigDict

from vue2twig.core.expressions import rewrite_condition


class TwigOptions(BaseModel):
    """Delimiter configuration for generated Twig.

    Replaced as a unit: pass a new instance to :class:`TwigBuilder` with the
    fields to override.
    """

    model_config = ConfigDict(frozen=True)

    tag_comment: tuple[str, str] = ("{#", "#}")
    tag_block: tuple[str, str] = ("{%", "%}")
    tag_variable: tuple[str, str] = ("{{", "}}")
    whitespace_trim: str = "-"
    interpolation: tuple[str, str] = ("#{", "}")
    trim_blocks: bool = False


class Property(BaseModel):
    """A property passed to an included partial."""

    model_config = ConfigDict(frozen=True)

    name: str
    value: str  # Twig expression
    is_binding: bool = False


class TwigBuilder:
    """Builds Twig control tags, comments and includes."""

    def __init__(
        self,
        options: TwigOptions | None = None,
        replacements: Mapping[str, str] | None = None,
    ) -> None:
        self.options = options or TwigOptions()
        self.replacements = replacements

    # -- variables ---------------------------------------------------------

    def create_set(self, name: str) -> str:
        return self.create_block(f"set {name}")

    def close_set(self) -> str:
        return self.create_block("endset")

    def create_variable(self, name: str, assignment: str) -> str:
        return self.create_block(f"set {name} = {assignment}")

    def create_default_for_variable(self, name: str, default_value: str) -> str:
        return self.create_block(f"set {name} = {name}|default({default_value})")

    def create_multiline_variable(self, name: str, assignment: str) -> str:
        return self.create_set(name) + assignment + self.close_set()

    def create_variable_output(self, name: str, fallback: str | None = None) -> str:
        open_tag, close_tag = self.options.tag_variable
        if fallback:
            return f"{open_tag} {name}|default({fallback}) {close_tag}"
        return f"{open_tag} {name} {close_tag}"

    # -- conditionals ------------------------------------------------------

    def create_if(self, condition: str) -> str:
        return self.create_block(f"if {rewrite_condition(condition, self.replacements)}")

    def create_else_if(self, condition: str) -> str:
        return self.create_block(f"elseif {rewrite_condition(condition, self.replacements)}")

    def create_else(self) -> str:
        return self.create_block("else")

    def create_end_if(self) -> str:
        return self.create_block("endif")

    # -- loops -------------------------------------------------------------

    def create_for_item_in_list(self, item: str, list_expr: str) -> str:
        return self.create_block(f"for {item} in {list_expr}")

    def create_for_key_in_list(self, key: str, list_expr: str) -> str:
        return self.create_block(f"for {key} in {list_expr}")

    def create_for(
        self,
        list_expr: str,
        item: str | None = None,
        key: str | None = None,
    ) -> str | None:
        """Open a for loop binding the item, the key, or both (key first)."""
        if item is not None and key is not None:
            return self.create_block(f"for {key}, {item} in {list_expr}")
        if item is not None:
            return self.create_for_item_in_list(item, list_expr)
        if key is not None:
            return self.create_for_key_in_list(key, list_expr)
        return None

    def create_end_for(self) -> str:
        return self.create_block("endfor")

    # -- comments ----------------------------------------------------------

    def create_comment(self, comment: str) -> str:
        open_tag, close_tag = self.options.tag_comment
        return f"{open_tag} {comment} {close_tag}"

    def create_multiline_comment(self, comments: Sequence[str]) -> str:
        open_tag, close_tag = self.options.tag_comment
        return f"{open_tag} " + "\n".join(comments) + f" {close_tag}"

    # -- includes ----------------------------------------------------------

    def create_include_partial(self, partial_path: str, properties: Sequence[Property] = ()) -> str:
        """Include a partial, passing ``properties`` as its context.

        A ``class`` property is always passed so partials can rely on it.
        """
        properties = list(properties)
        if not any(prop.name == "class" for prop in properties):
            properties.append(Property(name="class", value='""'))

        serialized = self.serialize_component_properties(properties)
        return self.create_block(f'include "{partial_path}" with {serialized}')

    def serialize_component_properties(self, properties: Sequence[Property]) -> str:
        """Render properties as a Twig hash literal, omitting ``key``."""
        items = [f"'{prop.name}': {prop.value}" for prop in properties if prop.name != "key"]
        return "{ " + ", ".join(items) + " }"

    # -- primitives --------------------------------------------------------

    def create_block(self, content: str) -> str:
        open_tag, close_tag = self.options.tag_block
        if self.options.trim_blocks:
            trim = self.options.whitespace_trim
            return f"{open_tag}{trim} {content} {trim}{close_tag}"
        return f"{open_tag} {content} {close_tag}"
