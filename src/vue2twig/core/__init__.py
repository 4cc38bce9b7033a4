"""Core vue2twig functionality: expression rewriting, Twig building, compilation, project builds."""

from .builder import Property, TwigBuilder, TwigOptions
from .chains import ChainMode
from .compiler import Compiler, compile_template
from .errors import (
    ChainStateError,
    ConfigError,
    ErrorContext,
    MalformedDirectiveError,
    StructuralError,
    Vue2TwigError,
)
from .expressions import rewrite_condition, rewrite_interpolation
from .manifest import Manifest, load_manifest
from .project import build_project, compile_file

__all__ = [
    "ChainMode",
    "ChainStateError",
    "Compiler",
    "ConfigError",
    "ErrorContext",
    "MalformedDirectiveError",
    "Manifest",
    "Property",
    "StructuralError",
    "TwigBuilder",
    "TwigOptions",
    "Vue2TwigError",
    "build_project",
    "compile_file",
    "compile_template",
    "load_manifest",
    "rewrite_condition",
    "rewrite_interpolation",
]
