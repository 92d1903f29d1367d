"""YAML export profiles: packaging and rendering defaults."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Mapping

import yaml

from themeforge.core.constants import ENGINE_RANGE, PACKAGE_VERSION, PUBLISHER
from themeforge.core.loader import ConversionOptions
from themeforge.runtime_paths import resolve_template

_STR_KEYS = ("publisher", "version", "engine_range")
_BOOL_KEYS = ("include_timestamp", "strict_keys")
_MAX_PROFILE_BYTES = 32 * 1024


class ProfileError(ValueError):
    """Raised when an export profile fails validation."""


@dataclass(frozen=True, slots=True)
class ExportProfile:
    """Defaults applied to conversions and VSIX packaging."""

    publisher: str = PUBLISHER
    version: str = PACKAGE_VERSION
    engine_range: str = ENGINE_RANGE
    include_timestamp: bool = False
    strict_keys: bool = False
    merge_template: str = ""

    def conversion_options(self, base_dir: Path | None = None) -> ConversionOptions:
        template: Path | None = None
        if self.merge_template:
            template = resolve_template(self.merge_template, base_dir=base_dir)
        return ConversionOptions(
            include_timestamp=self.include_timestamp,
            strict_keys=self.strict_keys,
            merge_template=template,
        )

    def package_kwargs(self) -> dict[str, str]:
        return {
            "publisher": self.publisher,
            "version": self.version,
            "engine_range": self.engine_range,
        }


def load_profile(path: Path) -> ExportProfile:
    """Read and validate a YAML profile."""
    try:
        if path.stat().st_size > _MAX_PROFILE_BYTES:
            raise ProfileError(f"{path}: file exceeds max size ({_MAX_PROFILE_BYTES} bytes)")
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ProfileError(f"Unable to read profile {path}: {exc}") from exc
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        raise ProfileError(f"Invalid YAML in {path}: {exc}") from exc
    if data is None:
        return ExportProfile()
    if not isinstance(data, Mapping):
        raise ProfileError(f"Expected a mapping in {path}")
    return parse_profile(data, context=str(path))


def parse_profile(data: Mapping[str, Any], *, context: str = "profile") -> ExportProfile:
    allowed = set(_STR_KEYS) | set(_BOOL_KEYS) | {"merge_template"}
    unknown = sorted(str(key) for key in data if key not in allowed)
    if unknown:
        raise ProfileError(f"{context}: unsupported keys found: {', '.join(unknown)}")

    values: dict[str, Any] = {}
    for key in _STR_KEYS:
        if key not in data:
            continue
        value = data[key]
        if not isinstance(value, str) or not value.strip():
            raise ProfileError(f"{context}: field {key!r} must be a non-empty string")
        values[key] = value.strip()
    for key in _BOOL_KEYS:
        if key not in data:
            continue
        if not isinstance(data[key], bool):
            raise ProfileError(f"{context}: field {key!r} must be true or false")
        values[key] = data[key]
    template = data.get("merge_template")
    if template is not None:
        if not isinstance(template, str):
            raise ProfileError(f"{context}: field 'merge_template' must be a path string")
        values["merge_template"] = template.strip()
    return ExportProfile(**values)


def save_profile(profile: ExportProfile, path: Path) -> Path:
    """Write ``profile`` as YAML and return its path."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        yaml.safe_dump(asdict(profile), default_flow_style=False, sort_keys=False),
        encoding="utf-8",
    )
    return path
