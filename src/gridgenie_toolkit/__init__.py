"""Top-level package for the GridGenie layout toolkit.

Provides subpackages:
- gridgenie_toolkit.core – immutable data models, serialization and schemas
- gridgenie_toolkit.engine – grid occupancy, placement and layout generation
- gridgenie_toolkit.output – PDF, SVG, PNG preview and JSON exporters
- gridgenie_toolkit.common – page sizes, bindings and tuning thresholds
"""

def _get_version() -> str:
    """Get version from pyproject.toml (dev) or importlib.metadata (installed)."""
    from pathlib import Path

    pyproject = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        for line in pyproject.read_text(encoding="utf-8").splitlines():
            if line.strip().startswith("version"):
                # Parse: version = "0.3.0"
                return line.split("=")[1].strip().strip('"').strip("'")

    from importlib.metadata import PackageNotFoundError, version as pkg_version
    try:
        return pkg_version("gridgenie_toolkit")
    except PackageNotFoundError:
        return "0.0.0"

__version__ = _get_version()
__all__: list[str] = ["__version__"]
