"""JSON-with-comments support for theme files."""

from __future__ import annotations

import json
from typing import Any

from themeforge.core.models import ThemeLoadError


def strip_jsonc(text: str) -> str:
    """Remove ``//`` and ``/* */`` comments and trailing commas.

    String literals are copied untouched, so ``"https://..."`` survives.
    """
    return _strip_trailing_commas(_strip_comments(text))


def loads_jsonc(text: str, *, source: str = "<string>") -> Any:
    try:
        return json.loads(strip_jsonc(text))
    except ValueError as exc:
        raise ThemeLoadError(f"Invalid JSON in {source}: {exc}") from exc


def _strip_comments(text: str) -> str:
    out: list[str] = []
    i = 0
    n = len(text)
    in_string = False
    while i < n:
        ch = text[i]
        if in_string:
            out.append(ch)
            if ch == "\\" and i + 1 < n:
                out.append(text[i + 1])
                i += 2
                continue
            if ch == '"':
                in_string = False
            i += 1
            continue

        if ch == '"':
            in_string = True
            out.append(ch)
            i += 1
            continue

        if ch == "/" and i + 1 < n:
            nxt = text[i + 1]
            if nxt == "/":
                end = text.find("\n", i + 2)
                # newline is kept so line numbers in decode errors stay right
                i = n if end == -1 else end
                continue
            if nxt == "*":
                end = text.find("*/", i + 2)
                if end == -1:
                    raise ValueError(f"Unterminated block comment at offset {i}")
                out.append("\n" * text.count("\n", i, end))
                i = end + 2
                continue

        out.append(ch)
        i += 1
    return "".join(out)


def _strip_trailing_commas(text: str) -> str:
    out: list[str] = []
    i = 0
    n = len(text)
    in_string = False
    while i < n:
        ch = text[i]
        if in_string:
            out.append(ch)
            if ch == "\\" and i + 1 < n:
                out.append(text[i + 1])
                i += 2
                continue
            if ch == '"':
                in_string = False
            i += 1
            continue

        if ch == '"':
            in_string = True
        elif ch == ",":
            j = i + 1
            while j < n and text[j] in " \t\r\n":
                j += 1
            if j < n and text[j] in "}]":
                i += 1
                continue
        out.append(ch)
        i += 1
    return "".join(out)
