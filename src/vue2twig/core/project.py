"""
Project conversion utilities.

Provides convenient functions for the common load → parse → convert → write
pipeline.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from .compiler import Compiler
from .errors import Vue2TwigError
from .fileset import discover_component_files, output_path_for
from .manifest import MANIFEST_NAME, Manifest, load_manifest
from .markup import parse_component

logger = logging.getLogger(__name__)


@dataclass
class ConvertedFile:
    """One component written (or planned) by :func:`build_project`."""

    source: Path
    target: Path
    twig: str


def compile_file(path: Path, manifest: Manifest | None = None) -> str:
    """
    Convert one component file into Twig.

    Args:
        path: Path to the .vue file
        manifest: Settings to convert with; defaults when omitted

    Returns:
        The Twig template text

    Raises:
        Vue2TwigError: If the component cannot be converted. The error
            message names ``path``.
    """
    manifest = manifest or Manifest()
    document = parse_component(path.read_text(encoding="utf-8"))
    header = f"Generated by vue2twig from {path.name}" if manifest.compiler.header_comment else None

    compiler = Compiler(
        document,
        manifest.make_builder(),
        chain_mode=manifest.compiler.chain_mode,
        rewrite_interpolations=manifest.compiler.rewrite_interpolations,
        convert_comments=manifest.compiler.convert_comments,
        components=manifest.components,
        defaults=manifest.defaults,
        header=header,
    )
    try:
        return compiler.convert()
    except Vue2TwigError as e:
        e.attach_file(path)
        raise


def build_project(
    project_dir: Path | str,
    manifest_path: Path | str | None = None,
    dry_run: bool = False,
) -> list[ConvertedFile]:
    """
    Convert every component of a project.

    This is a convenience function that performs the common pipeline:
    1. Load manifest (vue2twig.toml)
    2. Discover .vue files below ``project.source``
    3. Convert each file
    4. Write templates below ``project.output`` (skipped for ``dry_run``)

    Args:
        project_dir: Path to the project root directory
        manifest_path: Optional explicit path to vue2twig.toml.
                      If not provided, looks for vue2twig.toml in project_dir.
        dry_run: Convert without writing anything

    Returns:
        The converted files, in source path order

    Raises:
        Vue2TwigError: On the first component that fails to convert
    """
    root = Path(project_dir).resolve()
    manifest = load_manifest(Path(manifest_path) if manifest_path else root / MANIFEST_NAME)

    results: list[ConvertedFile] = []
    for source in discover_component_files(root, manifest):
        target = output_path_for(source, root, manifest)
        logger.debug("Converting %s -> %s", source, target)
        twig = compile_file(source, manifest)
        if not dry_run:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(twig + "\n", encoding="utf-8")
        results.append(ConvertedFile(source=source, target=target, twig=twig))

    if not results:
        logger.warning("No components found in %s", root / manifest.project.source)
    return results
