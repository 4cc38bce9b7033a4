import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from .builder import TwigBuilder, TwigOptions
from .chains import ChainMode
from .errors import ConfigError

MANIFEST_NAME = "vue2twig.toml"


# =============================================================================
# Project Configuration
# =============================================================================


@dataclass
class ProjectConfig:
    """Where sources are read from and templates are written to."""

    source: str = "components"
    output: str = "templates"
    extension: str = ".html.twig"


@dataclass
class CompilerConfig:
    """Compiler behaviour switches."""

    chain_mode: ChainMode = ChainMode.SCOPED
    rewrite_interpolations: bool = True
    convert_comments: bool = False
    header_comment: bool = False  # "Generated from ..." comment on top


@dataclass
class Manifest:
    """
    Conversion settings loaded from vue2twig.toml.

    Every section is optional; a missing file yields the defaults.
    """

    project: ProjectConfig = field(default_factory=ProjectConfig)
    compiler: CompilerConfig = field(default_factory=CompilerConfig)
    delimiters: TwigOptions = field(default_factory=TwigOptions)
    components: dict[str, str] = field(default_factory=dict)
    defaults: dict[str, str] = field(default_factory=dict)

    def make_builder(self) -> TwigBuilder:
        return TwigBuilder(self.delimiters)


def _pair(data: dict, key: str, default: tuple[str, str]) -> tuple[str, str]:
    value = data.get(key)
    if value is None:
        return default
    if not isinstance(value, list | tuple) or len(value) != 2:
        raise ConfigError(f"[delimiters] {key} must be a pair of strings, got {value!r}")
    return (str(value[0]), str(value[1]))


def load_manifest(path: Path) -> Manifest:
    if not path.exists():
        return Manifest()

    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"{path}: {e}") from e

    project = data.get("project", {})
    compiler = data.get("compiler", {})
    delimiters = data.get("delimiters", {})

    project_config = ProjectConfig(
        source=project.get("source", "components"),
        output=project.get("output", "templates"),
        extension=project.get("extension", ".html.twig"),
    )

    chain_mode = compiler.get("chain_mode", ChainMode.SCOPED.value)
    try:
        chain_mode = ChainMode(chain_mode)
    except ValueError:
        choices = ", ".join(mode.value for mode in ChainMode)
        raise ConfigError(f"[compiler] chain_mode must be one of {choices}, got {chain_mode!r}")

    compiler_config = CompilerConfig(
        chain_mode=chain_mode,
        rewrite_interpolations=compiler.get("rewrite_interpolations", True),
        convert_comments=compiler.get("convert_comments", False),
        header_comment=compiler.get("header_comment", False),
    )

    # Delimiters (fall back per field)
    base = TwigOptions()
    twig_options = TwigOptions(
        tag_comment=_pair(delimiters, "comment", base.tag_comment),
        tag_block=_pair(delimiters, "block", base.tag_block),
        tag_variable=_pair(delimiters, "variable", base.tag_variable),
        interpolation=_pair(delimiters, "interpolation", base.interpolation),
        whitespace_trim=delimiters.get("whitespace_trim", base.whitespace_trim),
        trim_blocks=delimiters.get("trim_blocks", base.trim_blocks),
    )

    return Manifest(
        project=project_config,
        compiler=compiler_config,
        delimiters=twig_options,
        components={str(k): str(v) for k, v in data.get("components", {}).items()},
        defaults={str(k): str(v) for k, v in data.get("defaults", {}).items()},
    )


def find_manifest(start: Path) -> Path | None:
    """Walk up from ``start`` looking for vue2twig.toml."""
    for directory in (start, *start.parents):
        candidate = directory / MANIFEST_NAME
        if candidate.exists():
            return candidate
    return None
