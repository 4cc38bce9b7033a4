"""
vue2twig - convert single-file component templates into Twig.

Directive-driven markup (v-if, v-for, :bindings, {{ interpolation }}) is
rewritten into the equivalent server-side Twig template.
"""

from __future__ import annotations

from ._version import get_version
from .core.builder import TwigBuilder, TwigOptions
from .core.compiler import Compiler, compile_template
from .core.errors import (
    ChainStateError,
    ConfigError,
    MalformedDirectiveError,
    StructuralError,
    Vue2TwigError,
)
from .core.project import build_project, compile_file

__version__ = get_version()

__all__ = [
    "__version__",
    "Compiler",
    "compile_template",
    "compile_file",
    "build_project",
    "TwigBuilder",
    "TwigOptions",
    "Vue2TwigError",
    "StructuralError",
    "ChainStateError",
    "MalformedDirectiveError",
    "ConfigError",
]
