"""
Error types for vue2twig template conversion.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


class Vue2TwigError(Exception):
    """Base exception for all vue2twig errors."""

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}\n{self.message}"
        return self.message

    def attach_file(self, file: Path) -> None:
        """Record the component file the error was raised for."""
        if self.context is None:
            self.message = f"{file}: {self.message}"
        elif self.context.file is None:
            self.context.file = file
        else:
            return
        self.args = (self._format_message(),)


class StructuralError(Vue2TwigError):
    """
    Raised when the component does not have the expected document shape.

    Examples:
    - No <template> element
    - Template without a root element
    - Template with several root elements
    """

    pass


class ChainStateError(Vue2TwigError):
    """
    Raised when a conditional continuation has nothing to continue.

    Examples:
    - v-else-if / v-else with no preceding v-if
    - v-else separated from its v-if group by another element
    """

    pass


class MalformedDirectiveError(Vue2TwigError):
    """
    Raised when a directive value or name cannot be interpreted.

    Examples:
    - v-for without the " in " separator
    - v-for binding more than (value, key, index)
    - v-bind: / ":" with nothing after the prefix
    """

    pass


class ConfigError(Vue2TwigError):
    """Raised when vue2twig.toml contains invalid values."""

    pass


@dataclass
class ErrorContext:
    """
    Location of an error inside a component template.

    Attributes:
        tag: Name of the element carrying the offending directive
        attribute: Attribute name, if the error concerns one attribute
        value: Raw attribute value as written in the source
        file: Source file, when known
    """

    tag: str
    attribute: str | None = None
    value: str | None = None
    file: Path | None = None

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like: 'Card.vue: <li v-for="x of items">'
        """
        element = f"<{self.tag}"
        if self.attribute is not None:
            if self.value:
                element += f' {self.attribute}="{self.value}"'
            else:
                element += f" {self.attribute}"
        element += ">"

        if self.file:
            return f"{self.file}: {element}"
        return element


def make_directive_error(
    message: str,
    tag: str,
    attribute: str | None = None,
    value: str | None = None,
) -> MalformedDirectiveError:
    """
    Helper to create a MalformedDirectiveError with context.

    Args:
        message: Error description
        tag: Element name
        attribute: Directive attribute name
        value: Raw directive value

    Returns:
        MalformedDirectiveError with context attached
    """
    context = ErrorContext(tag=tag, attribute=attribute, value=value)
    return MalformedDirectiveError(message, context)


def make_chain_error(
    message: str,
    tag: str,
    attribute: str,
    value: str | None = None,
) -> ChainStateError:
    """
    Helper to create a ChainStateError with context.

    Args:
        message: Error description
        tag: Element name
        attribute: The v-else-if / v-else attribute
        value: Raw condition, if any

    Returns:
        ChainStateError with context attached
    """
    context = ErrorContext(tag=tag, attribute=attribute, value=value)
    return ChainStateError(message, context)
