"""Error codes and error handling utilities for ThemeForge."""

from __future__ import annotations

import json
import zipfile
from dataclasses import dataclass, field
from enum import Enum, auto
from pathlib import Path
from typing import Any

from themeforge.config.profile import ProfileError
from themeforge.core.models import (
    ArchiveError,
    KeyCollisionError,
    ThemeLoadError,
    ThemeStructureError,
    UnsupportedFormatError,
)


class ErrorCode(Enum):
    """Standardized error codes for ThemeForge operations."""

    # File system errors
    FILE_NOT_FOUND = auto()
    FILE_ACCESS_DENIED = auto()
    DISK_FULL = auto()

    # Input errors
    UNSUPPORTED_FORMAT = auto()
    INVALID_JSON = auto()
    THEME_STRUCTURE_INVALID = auto()
    ARCHIVE_INVALID = auto()

    # Conversion errors
    KEY_COLLISION = auto()

    # Operation errors
    OPERATION_CANCELLED = auto()
    OPERATION_FAILED = auto()

    # Configuration errors
    CONFIG_INVALID = auto()
    CONFIG_MISSING = auto()


ERROR_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.FILE_NOT_FOUND: "The file was not found. It may have been moved or deleted.",
    ErrorCode.FILE_ACCESS_DENIED: "Access denied. Check file permissions or if the file is read-only.",
    ErrorCode.DISK_FULL: "The destination disk is full. Free up space and try again.",

    ErrorCode.UNSUPPORTED_FORMAT: "Unsupported file format. Use a .json, .jsonc or .vsix theme file.",
    ErrorCode.INVALID_JSON: "The theme file is not valid JSON, even after removing comments.",
    ErrorCode.THEME_STRUCTURE_INVALID: "The theme file does not have the expected colors/tokenColors layout.",
    ErrorCode.ARCHIVE_INVALID: "The extension archive is missing its package manifest or theme files.",

    ErrorCode.KEY_COLLISION: "Several colour keys map to the same CSS property. Rename one of them.",

    ErrorCode.OPERATION_CANCELLED: "Operation was cancelled by user.",
    ErrorCode.OPERATION_FAILED: "Operation failed. See details for more information.",

    ErrorCode.CONFIG_INVALID: "The export profile is invalid. Check its keys and values.",
    ErrorCode.CONFIG_MISSING: "Export profile not found. Using defaults.",
}


@dataclass
class ThemeForgeError(Exception):
    """Base exception for ThemeForge with error code and context."""

    code: ErrorCode
    message: str = ""
    path: Path | None = None
    details: dict[str, Any] = field(default_factory=dict)
    suggestion: str = ""

    def __post_init__(self) -> None:
        if not self.message:
            self.message = ERROR_MESSAGES.get(self.code, "An unexpected error occurred.")
        if not self.suggestion and self.code in ERROR_MESSAGES:
            self.suggestion = ERROR_MESSAGES[self.code]

    def __str__(self) -> str:
        lines = [f"[{self.code.name}] {self.message}"]
        if self.path:
            lines.append(f"File: {self.path}")
        lines.extend(f"{key}: {value}" for key, value in self.details.items())
        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging or UI display."""
        return {
            "code": self.code.name,
            "message": self.message,
            "path": str(self.path) if self.path else None,
            "details": self.details,
            "suggestion": self.suggestion,
        }


def classify_exception(exc: Exception, path: Path | None = None) -> ThemeForgeError:
    """Classify an exception into a ThemeForgeError with appropriate code."""
    if isinstance(exc, ThemeForgeError):
        return exc

    details = {"original": str(exc)}

    # Order matters: ArchiveError is a ThemeLoadError.
    if isinstance(exc, UnsupportedFormatError):
        return ThemeForgeError(ErrorCode.UNSUPPORTED_FORMAT, message=str(exc), path=path)
    if isinstance(exc, ArchiveError):
        return ThemeForgeError(ErrorCode.ARCHIVE_INVALID, message=str(exc), path=path)
    if isinstance(exc, ThemeStructureError):
        return ThemeForgeError(ErrorCode.THEME_STRUCTURE_INVALID, message=str(exc), path=path)
    if isinstance(exc, KeyCollisionError):
        return ThemeForgeError(
            ErrorCode.KEY_COLLISION,
            message=str(exc),
            path=path,
            details={"collisions": exc.collisions},
        )
    if isinstance(exc, ProfileError):
        return ThemeForgeError(ErrorCode.CONFIG_INVALID, message=str(exc), path=path)
    if isinstance(exc, (ThemeLoadError, json.JSONDecodeError)):
        if isinstance(exc.__cause__, FileNotFoundError):
            return ThemeForgeError(ErrorCode.FILE_NOT_FOUND, path=path, details=details)
        if isinstance(exc.__cause__, PermissionError):
            return ThemeForgeError(ErrorCode.FILE_ACCESS_DENIED, path=path, details=details)
        return ThemeForgeError(ErrorCode.INVALID_JSON, message=str(exc), path=path)
    if isinstance(exc, zipfile.BadZipFile):
        return ThemeForgeError(ErrorCode.ARCHIVE_INVALID, path=path, details=details)

    exc_str = str(exc).lower()
    if isinstance(exc, FileNotFoundError) or "no such file" in exc_str:
        return ThemeForgeError(ErrorCode.FILE_NOT_FOUND, path=path, details=details)
    if isinstance(exc, PermissionError) or "permission denied" in exc_str:
        return ThemeForgeError(ErrorCode.FILE_ACCESS_DENIED, path=path, details=details)
    if "disk full" in exc_str or "no space left" in exc_str:
        return ThemeForgeError(ErrorCode.DISK_FULL, path=path, details=details)

    # Default
    return ThemeForgeError(
        ErrorCode.OPERATION_FAILED,
        message=f"{type(exc).__name__}: {exc}",
        path=path,
        details=details,
    )


def format_error_for_user(error: ThemeForgeError | Exception) -> str:
    """Message, then a hint and the file name as separate paragraphs."""
    if not isinstance(error, ThemeForgeError):
        error = classify_exception(error)
    blocks = [error.message]
    if error.suggestion and error.suggestion != error.message:
        blocks.append(f"Hint: {error.suggestion}")
    if error.path:
        blocks.append(f"File: {Path(error.path).name}")
    return "\n\n".join(blocks)
