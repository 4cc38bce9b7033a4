"""Tests for the Twig text builder."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from vue2twig.core.builder import Property, TwigBuilder, TwigOptions


@pytest.fixture
def builder() -> TwigBuilder:
    return TwigBuilder()


class TestConditionals:
    def test_if_rewrites_condition(self, builder: TwigBuilder) -> None:
        assert builder.create_if("a && !b") == "{% if a and not b %}"

    def test_else_if(self, builder: TwigBuilder) -> None:
        assert builder.create_else_if("x === 1") == "{% elseif x == 1 %}"

    def test_else_and_endif(self, builder: TwigBuilder) -> None:
        assert builder.create_else() == "{% else %}"
        assert builder.create_end_if() == "{% endif %}"

    def test_custom_replacements(self) -> None:
        builder = TwigBuilder(replacements={"nil": "null"})
        assert builder.create_if("x === nil") == "{% if x == null %}"


class TestLoops:
    def test_item(self, builder: TwigBuilder) -> None:
        assert builder.create_for("items", item="item") == "{% for item in items %}"

    def test_key_and_item(self, builder: TwigBuilder) -> None:
        assert builder.create_for("items", item="item", key="key") == "{% for key, item in items %}"

    def test_key_only(self, builder: TwigBuilder) -> None:
        assert builder.create_for("items", key="key") == "{% for key in items %}"

    def test_nothing_to_bind(self, builder: TwigBuilder) -> None:
        assert builder.create_for("items") is None

    def test_end_for(self, builder: TwigBuilder) -> None:
        assert builder.create_end_for() == "{% endfor %}"


class TestVariables:
    def test_variable(self, builder: TwigBuilder) -> None:
        assert builder.create_variable("i", "loop.index0") == "{% set i = loop.index0 %}"

    def test_default_for_variable(self, builder: TwigBuilder) -> None:
        assert (
            builder.create_default_for_variable("title", "'Untitled'")
            == "{% set title = title|default('Untitled') %}"
        )

    def test_multiline_variable(self, builder: TwigBuilder) -> None:
        assert (
            builder.create_multiline_variable("body", "<p>x</p>")
            == "{% set body %}<p>x</p>{% endset %}"
        )

    def test_variable_output(self, builder: TwigBuilder) -> None:
        assert builder.create_variable_output("name") == "{{ name }}"
        assert builder.create_variable_output("name", "'-'") == "{{ name|default('-') }}"


class TestComments:
    def test_comment(self, builder: TwigBuilder) -> None:
        assert builder.create_comment("note") == "{# note #}"

    def test_multiline_comment(self, builder: TwigBuilder) -> None:
        assert builder.create_multiline_comment(["first", "second"]) == "{# first\nsecond #}"


class TestIncludes:
    def test_class_is_always_passed(self, builder: TwigBuilder) -> None:
        result = builder.create_include_partial("card.twig", [Property(name="title", value="'Hi'")])
        assert result == "{% include \"card.twig\" with { 'title': 'Hi', 'class': \"\" } %}"

    def test_existing_class_is_kept(self, builder: TwigBuilder) -> None:
        result = builder.create_include_partial(
            "card.twig", [Property(name="class", value="theme", is_binding=True)]
        )
        assert result == "{% include \"card.twig\" with { 'class': theme } %}"

    def test_key_is_not_serialized(self, builder: TwigBuilder) -> None:
        properties = [Property(name="key", value="item.id"), Property(name="item", value="item")]
        assert builder.serialize_component_properties(properties) == "{ 'item': item }"


class TestOptions:
    def test_trim_blocks(self) -> None:
        builder = TwigBuilder(TwigOptions(trim_blocks=True))
        assert builder.create_if("a") == "{%- if a -%}"

    def test_custom_block_delimiters(self) -> None:
        builder = TwigBuilder(TwigOptions(tag_block=("<%", "%>")))
        assert builder.create_end_if() == "<% endif %>"

    def test_custom_comment_and_variable_delimiters(self) -> None:
        builder = TwigBuilder(TwigOptions(tag_comment=("<#", "#>"), tag_variable=("[[", "]]")))
        assert builder.create_comment("x") == "<# x #>"
        assert builder.create_variable_output("x") == "[[ x ]]"

    def test_options_are_frozen(self) -> None:
        options = TwigOptions()
        with pytest.raises(ValidationError):
            options.trim_blocks = True  # type: ignore[misc]
