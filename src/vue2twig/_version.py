"""Version lookup for vue2twig."""

import re
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _metadata_version
from pathlib import Path

DISTRIBUTION = "vue2twig"
FALLBACK_VERSION = "0.0.0"

_PYPROJECT = Path(__file__).resolve().parents[2] / "pyproject.toml"
_VERSION_RE = re.compile(r'^version\s*=\s*["\']([^"\']+)["\']', re.MULTILINE)


def get_version() -> str:
    """Version of a source checkout (pyproject.toml) or of the installed distribution."""
    if _PYPROJECT.exists():
        match = _VERSION_RE.search(_PYPROJECT.read_text(encoding="utf-8"))
        if match:
            return match.group(1)
    try:
        return _metadata_version(DISTRIBUTION)
    except PackageNotFoundError:
        return FALLBACK_VERSION
