"""Theme document models and transcoder exceptions."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, Mapping, Union

from themeforge.core.constants import DEFAULT_THEME_NAME, DEFAULT_THEME_TYPE

_KNOWN_KEYS = ("name", "type", "colors", "tokenColors", "semanticTokenColors")


class ThemeLoadError(ValueError):
    """Raised when a theme source cannot be read or decoded."""


class ArchiveError(ThemeLoadError):
    """Raised when an extension archive lacks the entries a theme needs."""


class UnsupportedFormatError(ValueError):
    """Raised for input files whose extension is not a known theme format."""


class ThemeStructureError(ValueError):
    """Raised when a theme document has the wrong top-level or section shape."""


class KeyCollisionError(ValueError):
    """Raised in strict mode when distinct colour keys render to one property."""

    def __init__(self, collisions: Mapping[str, list[str]]) -> None:
        self.collisions = {prop: list(keys) for prop, keys in collisions.items()}
        joined = "; ".join(
            f"{prop} <- {', '.join(keys)}" for prop, keys in self.collisions.items()
        )
        super().__init__(f"Colour keys collide after conversion: {joined}")


@dataclass(frozen=True, slots=True)
class TokenSettings:
    """Style settings of a TextMate token rule."""

    foreground: str | None = None
    background: str | None = None
    font_style: str | None = None

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any], context: str) -> TokenSettings:
        return cls(
            foreground=_optional_str(raw, "foreground", context),
            background=_optional_str(raw, "background", context),
            font_style=_optional_str(raw, "fontStyle", context),
        )

    def to_dict(self) -> dict[str, str]:
        data: dict[str, str] = {}
        if self.foreground is not None:
            data["foreground"] = self.foreground
        if self.background is not None:
            data["background"] = self.background
        if self.font_style is not None:
            data["fontStyle"] = self.font_style
        return data


@dataclass(frozen=True, slots=True)
class TokenRule:
    """One entry of ``tokenColors``.

    ``scope`` keeps the source shape: ``None``, a single string, or a tuple
    of strings for list scopes.
    """

    scope: str | tuple[str, ...] | None = None
    settings: TokenSettings | None = None
    name: str | None = None

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any], index: int) -> TokenRule:
        context = f"tokenColors[{index}]"
        scope = raw.get("scope")
        if scope is not None:
            if isinstance(scope, list):
                if not all(isinstance(item, str) for item in scope):
                    raise ThemeStructureError(f"{context}: scope list must contain only strings")
                scope = tuple(scope)
            elif not isinstance(scope, str):
                raise ThemeStructureError(
                    f"{context}: scope must be a string or a list of strings, "
                    f"got {type(scope).__name__}"
                )

        settings = raw.get("settings")
        if settings is not None:
            if not isinstance(settings, Mapping):
                raise ThemeStructureError(f"{context}: settings must be an object")
            settings = TokenSettings.from_mapping(settings, context)

        name = raw.get("name")
        return cls(
            scope=scope,
            settings=settings,
            name=name if isinstance(name, str) else None,
        )

    @property
    def scopes(self) -> tuple[str, ...]:
        if self.scope is None:
            return ()
        if isinstance(self.scope, str):
            return (self.scope,)
        return self.scope

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.name is not None:
            data["name"] = self.name
        if isinstance(self.scope, tuple):
            data["scope"] = list(self.scope)
        elif self.scope is not None:
            data["scope"] = self.scope
        if self.settings is not None:
            data["settings"] = self.settings.to_dict()
        return data


@dataclass(frozen=True, slots=True)
class SemanticColor:
    """Semantic token value given as a bare colour string."""

    color: str


@dataclass(frozen=True, slots=True)
class SemanticStyle:
    """Semantic token value given as a style object."""

    foreground: str | None = None
    background: str | None = None
    font_style: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)


SemanticValue = Union[SemanticColor, SemanticStyle]


def semantic_value_from_raw(raw: object, scope: str) -> SemanticValue:
    """Tag a raw ``semanticTokenColors`` value as colour or style."""
    if isinstance(raw, str):
        return SemanticColor(raw)
    if isinstance(raw, Mapping):
        context = f"semanticTokenColors[{scope!r}]"
        extra = {
            key: value
            for key, value in raw.items()
            if key not in ("foreground", "background", "fontStyle")
        }
        return SemanticStyle(
            foreground=_optional_str(raw, "foreground", context),
            background=_optional_str(raw, "background", context),
            font_style=_optional_str(raw, "fontStyle", context),
            extra=extra,
        )
    raise ThemeStructureError(
        f"semanticTokenColors[{scope!r}] must be a colour string or a style object, "
        f"got {type(raw).__name__}"
    )


def semantic_value_to_raw(value: SemanticValue) -> str | dict[str, Any]:
    if isinstance(value, SemanticColor):
        return value.color
    data: dict[str, Any] = {}
    if value.foreground is not None:
        data["foreground"] = value.foreground
    if value.background is not None:
        data["background"] = value.background
    if value.font_style is not None:
        data["fontStyle"] = value.font_style
    data.update(value.extra)
    return data


@dataclass(slots=True)
class ThemeDocument:
    """In-memory form of a VS Code colour theme."""

    name: str = DEFAULT_THEME_NAME
    type: str = DEFAULT_THEME_TYPE
    colors: dict[str, str] = field(default_factory=dict)
    token_colors: list[TokenRule] = field(default_factory=list)
    semantic_token_colors: dict[str, SemanticValue] = field(default_factory=dict)
    extras: dict[str, Any] = field(default_factory=dict)
    # top-level key order of the source mapping, replayed by to_dict
    key_order: tuple[str, ...] = field(default=(), compare=False)

    @classmethod
    def from_mapping(cls, raw: object) -> ThemeDocument:
        """Build a document from parsed theme JSON.

        Absent sections are empty; sections of the wrong shape raise
        ThemeStructureError.
        """
        if not isinstance(raw, Mapping):
            raise ThemeStructureError(
                f"Theme document must be a JSON object, got {type(raw).__name__}"
            )

        name = raw.get("name")
        theme_type = raw.get("type")

        return cls(
            name=name.strip() if isinstance(name, str) and name.strip() else DEFAULT_THEME_NAME,
            type=theme_type if isinstance(theme_type, str) and theme_type else DEFAULT_THEME_TYPE,
            colors=_parse_colors(raw.get("colors")),
            token_colors=_parse_token_colors(raw.get("tokenColors")),
            semantic_token_colors=_parse_semantic(raw.get("semanticTokenColors")),
            extras={key: value for key, value in raw.items() if key not in _KNOWN_KEYS},
            key_order=tuple(str(key) for key in raw),
        )

    def to_dict(self) -> dict[str, Any]:
        """Plain theme mapping.

        Keys present in the source come first, in source order. ``name``,
        ``type`` and the three sections are always written.
        """
        sections: dict[str, Any] = {"name": self.name, "type": self.type}
        sections.update(copy.deepcopy(self.extras))
        sections["colors"] = dict(self.colors)
        sections["tokenColors"] = [rule.to_dict() for rule in self.token_colors]
        sections["semanticTokenColors"] = {
            scope: semantic_value_to_raw(value)
            for scope, value in self.semantic_token_colors.items()
        }
        data = {key: sections[key] for key in self.key_order if key in sections}
        data.update((key, value) for key, value in sections.items() if key not in data)
        return data

    def copy(self) -> ThemeDocument:
        return ThemeDocument(
            name=self.name,
            type=self.type,
            colors=dict(self.colors),
            token_colors=list(self.token_colors),
            semantic_token_colors=dict(self.semantic_token_colors),
            extras=copy.deepcopy(self.extras),
            key_order=self.key_order,
        )

    def renamed(self, name: str) -> ThemeDocument:
        doc = self.copy()
        doc.name = name
        return doc


def _parse_colors(raw: object) -> dict[str, str]:
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise ThemeStructureError(f"colors must be an object, got {type(raw).__name__}")
    colors: dict[str, str] = {}
    for key, value in raw.items():
        if value is None:
            continue
        if not isinstance(value, str):
            raise ThemeStructureError(
                f"colors[{key!r}] must be a string, got {type(value).__name__}"
            )
        colors[str(key)] = value
    return colors


def _parse_token_colors(raw: object) -> list[TokenRule]:
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise ThemeStructureError(f"tokenColors must be an array, got {type(raw).__name__}")
    rules: list[TokenRule] = []
    for index, entry in enumerate(raw):
        if not isinstance(entry, Mapping):
            raise ThemeStructureError(f"tokenColors[{index}] must be an object")
        rules.append(TokenRule.from_mapping(entry, index))
    return rules


def _parse_semantic(raw: object) -> dict[str, SemanticValue]:
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise ThemeStructureError(
            f"semanticTokenColors must be an object, got {type(raw).__name__}"
        )
    return {str(scope): semantic_value_from_raw(value, str(scope)) for scope, value in raw.items()}


def _optional_str(raw: Mapping[str, Any], key: str, context: str) -> str | None:
    value = raw.get(key)
    if value is None or isinstance(value, str):
        return value
    raise ThemeStructureError(f"{context}: {key} must be a string, got {type(value).__name__}")
