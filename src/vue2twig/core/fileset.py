from pathlib import Path

from .manifest import Manifest

COMPONENT_SUFFIX = ".vue"


def discover_component_files(root: Path, manifest: Manifest) -> list[Path]:
    base = (root / manifest.project.source).resolve()
    if not base.exists():
        return []
    return sorted(set(base.rglob(f"*{COMPONENT_SUFFIX}")))


def output_path_for(source: Path, root: Path, manifest: Manifest) -> Path:
    """Mirror ``source`` below the output directory with the template suffix."""
    base = (root / manifest.project.source).resolve()
    relative = source.resolve().relative_to(base)
    target = (root / manifest.project.output).resolve() / relative
    return target.with_name(target.name.removesuffix(COMPONENT_SUFFIX) + manifest.project.extension)
