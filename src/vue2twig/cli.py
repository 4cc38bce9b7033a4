"""
vue2twig command line.

Commands:
- convert: Convert one component and print (or write) the Twig template
- build: Convert every component of a project configured by vue2twig.toml
"""

from __future__ import annotations

import logging
import platform
from pathlib import Path

import typer

from vue2twig._version import get_version
from vue2twig.core.chains import ChainMode
from vue2twig.core.errors import Vue2TwigError
from vue2twig.core.manifest import MANIFEST_NAME, Manifest, find_manifest, load_manifest
from vue2twig.core.project import build_project, compile_file

app = typer.Typer(
    help="vue2twig - convert component templates into Twig",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        typer.echo(f"vue2twig version {get_version()}")
        typer.echo(f"  Python:        {platform.python_implementation()} {platform.python_version()}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and environment information",
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Log compiler decisions to stderr"),
) -> None:
    """vue2twig CLI main callback for global options."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


@app.command(name="convert")
def convert_command(
    source: Path = typer.Argument(..., exists=True, dir_okay=False, help="Component file (.vue)"),  # noqa: B008
    output: Path | None = typer.Option(  # noqa: B008
        None,
        "--output",
        "-o",
        help="Write the template here instead of stdout",
    ),
    manifest: Path | None = typer.Option(  # noqa: B008
        None,
        "--manifest",
        "-m",
        help=f"Path to {MANIFEST_NAME} (default: searched upwards from the source)",
    ),
    chain_mode: ChainMode | None = typer.Option(
        None,
        "--chain-mode",
        help="Override conditional-chain scoping",
    ),
) -> None:
    """
    Convert one component into Twig.

    Examples:
        vue2twig convert Card.vue                  # Print to stdout
        vue2twig convert Card.vue -o card.twig     # Write a file
        vue2twig convert Card.vue --chain-mode global
    """
    try:
        manifest_path = manifest or find_manifest(source.resolve().parent)
        mf = load_manifest(manifest_path) if manifest_path else Manifest()
        if chain_mode is not None:
            mf.compiler.chain_mode = chain_mode
        twig = compile_file(source, mf)
    except Vue2TwigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    if output is None:
        typer.echo(twig)
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(twig + "\n", encoding="utf-8")
    typer.echo(f"Wrote {output}", err=True)


@app.command(name="build")
def build_command(
    project_dir: Path = typer.Option(  # noqa: B008
        Path("."),
        "--project",
        "-p",
        help="Project directory (default: current directory)",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        "-n",
        help="Convert without writing files",
    ),
) -> None:
    """
    Convert every component below [project].source.

    Templates are written below [project].output, mirroring the source
    layout. Configuration is read from vue2twig.toml in the project directory.

    Examples:
        vue2twig build                 # Build current project
        vue2twig build -p ./frontend   # Build another project
        vue2twig build --dry-run       # List what would be written
    """
    try:
        results = build_project(project_dir, dry_run=dry_run)
    except Vue2TwigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    for result in results:
        prefix = "Would write" if dry_run else "Wrote"
        typer.echo(f"{prefix} {result.target}")
    typer.echo(f"{len(results)} component(s) converted")


def main(argv: list[str] | None = None) -> None:
    app(args=argv, standalone_mode=True)


if __name__ == "__main__":
    main()
