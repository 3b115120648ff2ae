"""Top-level package for the Marksheet Toolkit.

Provides subpackages:
- marksheet_toolkit.core – student/mark models, validation, serialization
- marksheet_toolkit.grading – subject catalog, marking schemes, grades, GPA, ranking
- marksheet_toolkit.storage – record store interface and backends
- marksheet_toolkit.interchange – spreadsheet import/export
- marksheet_toolkit.reports – page layout and PDF rendering
"""

def _get_version() -> str:
    """Get version from pyproject.toml (dev) or importlib.metadata (installed)."""
    from pathlib import Path

    pyproject = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        try:
            content = pyproject.read_text()
            for line in content.splitlines():
                if line.strip().startswith("version"):
                    # Parse: version = "0.1.0"
                    return line.split("=")[1].strip().strip('"').strip("'")
        except OSError:
            pass

    from importlib.metadata import PackageNotFoundError, version as pkg_version
    try:
        return pkg_version("marksheet-toolkit")
    except PackageNotFoundError:
        return "0.0.0"

__version__ = _get_version()
__all__: list[str] = ["__version__"]
