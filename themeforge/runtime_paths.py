"""Locate bundled template resources in source and frozen layouts."""

from __future__ import annotations

from pathlib import Path
import sys

BUILTIN_TEMPLATE_NAME = "elements"


def is_frozen() -> bool:
    """Return True when running from a PyInstaller bundle."""
    return bool(getattr(sys, "frozen", False))


def package_root() -> Path:
    """Return the directory holding the `themeforge` package resources."""
    meipass = getattr(sys, "_MEIPASS", None) if is_frozen() else None
    if meipass:
        candidate = Path(meipass) / "themeforge"
        return candidate if candidate.exists() else Path(meipass)
    return Path(__file__).resolve().parent


def templates_root() -> Path:
    return package_root() / "templates"


def builtin_template_path() -> Path:
    """The default element template shipped with the package."""
    return templates_root() / f"{BUILTIN_TEMPLATE_NAME}.jsonc"


def resolve_template(reference: str, *, base_dir: Path | None = None) -> Path:
    """Turn a template reference into a path.

    ``reference`` is either the name of a bundled template (``"elements"``) or a
    file path, relative paths resolving against ``base_dir`` when given.
    """
    bundled = templates_root() / f"{reference}.jsonc"
    if "/" not in reference and "\\" not in reference and bundled.exists():
        return bundled
    path = Path(reference).expanduser()
    if base_dir is not None and not path.is_absolute():
        path = base_dir / path
    return path
