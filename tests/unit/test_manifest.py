"""Tests for vue2twig.toml loading."""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from vue2twig.core.chains import ChainMode
from vue2twig.core.errors import ConfigError
from vue2twig.core.manifest import MANIFEST_NAME, Manifest, find_manifest, load_manifest


def _write_toml(tmp_path: Path, content: str) -> Path:
    p = tmp_path / MANIFEST_NAME
    p.write_text(textwrap.dedent(content), encoding="utf-8")
    return p


class TestLoadManifest:
    def test_missing_file_gives_defaults(self, tmp_path: Path) -> None:
        mf = load_manifest(tmp_path / MANIFEST_NAME)
        assert mf == Manifest()
        assert mf.project.extension == ".html.twig"
        assert mf.compiler.chain_mode is ChainMode.SCOPED

    def test_all_sections(self, tmp_path: Path) -> None:
        path = _write_toml(
            tmp_path,
            """\
            [project]
            source = "src/components"
            output = "views"
            extension = ".twig"

            [compiler]
            chain_mode = "global"
            rewrite_interpolations = false
            convert_comments = true
            header_comment = true

            [delimiters]
            block = ["<%", "%>"]
            trim_blocks = true

            [components]
            UserCard = "partials/user-card.twig"

            [defaults]
            title = "'Untitled'"
            """,
        )
        mf = load_manifest(path)

        assert mf.project.source == "src/components"
        assert mf.project.output == "views"
        assert mf.project.extension == ".twig"
        assert mf.compiler.chain_mode is ChainMode.GLOBAL
        assert mf.compiler.rewrite_interpolations is False
        assert mf.compiler.convert_comments is True
        assert mf.compiler.header_comment is True
        assert mf.delimiters.tag_block == ("<%", "%>")
        assert mf.delimiters.tag_variable == ("{{", "}}")
        assert mf.delimiters.trim_blocks is True
        assert mf.components == {"UserCard": "partials/user-card.twig"}
        assert mf.defaults == {"title": "'Untitled'"}

    def test_make_builder_uses_delimiters(self, tmp_path: Path) -> None:
        path = _write_toml(
            tmp_path,
            """\
            [delimiters]
            comment = ["<#", "#>"]
            """,
        )
        builder = load_manifest(path).make_builder()
        assert builder.create_comment("x") == "<# x #>"

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = _write_toml(tmp_path, "[project\n")
        with pytest.raises(ConfigError):
            load_manifest(path)

    def test_unknown_chain_mode(self, tmp_path: Path) -> None:
        path = _write_toml(
            tmp_path,
            """\
            [compiler]
            chain_mode = "nearest"
            """,
        )
        with pytest.raises(ConfigError, match="chain_mode"):
            load_manifest(path)

    def test_delimiter_must_be_pair(self, tmp_path: Path) -> None:
        path = _write_toml(
            tmp_path,
            """\
            [delimiters]
            variable = ["{{"]
            """,
        )
        with pytest.raises(ConfigError, match="pair of strings"):
            load_manifest(path)


class TestFindManifest:
    def test_found_in_parent(self, tmp_path: Path) -> None:
        path = _write_toml(tmp_path, "")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        assert find_manifest(nested) == path
