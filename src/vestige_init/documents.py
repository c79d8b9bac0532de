"""Read and write the JSON documents tools keep their MCP servers in."""

from __future__ import annotations

import json
import logging
import shutil
from pathlib import Path
from typing import Any

from vestige_init.errors import ParseError, WriteError

logger = logging.getLogger("vestige_init")


def _comment_end(text: str, i: int) -> int | None:
    """Index just past the comment starting at i, or None if none starts there."""
    if text.startswith("//", i):
        end = text.find("\n", i + 2)
        return len(text) if end == -1 else end
    if text.startswith("/*", i):
        end = text.find("*/", i + 2)
        return len(text) if end == -1 else end + 2
    return None


def _is_trailing_comma(text: str, i: int) -> bool:
    j = i + 1
    while j < len(text):
        if text[j].isspace():
            j += 1
            continue
        end = _comment_end(text, j)
        if end is None:
            break
        j = end
    return j < len(text) and text[j] in "}]"


def strip_jsonc(text: str) -> str:
    """Turn JSONC into plain JSON.

    Drops // and /* */ comments and trailing commas before } or ]. Tracks
    whether we are inside a JSON string so that // in values (URLs) and
    commas in values survive.
    """
    result: list[str] = []
    i = 0
    length = len(text)
    in_string = False
    escape = False

    while i < length:
        ch = text[i]

        if in_string:
            result.append(ch)
            if escape:
                escape = False
            elif ch == "\\":
                escape = True
            elif ch == '"':
                in_string = False
            i += 1
            continue

        if ch == '"':
            in_string = True
            result.append(ch)
            i += 1
            continue

        end = _comment_end(text, i)
        if end is not None:
            i = end
            continue

        if ch == "," and _is_trailing_comma(text, i):
            i += 1
            continue

        result.append(ch)
        i += 1

    return "".join(result)


def parse_document(raw: str, allow_comments: bool = False) -> dict[str, Any]:
    """Parse a config document. Raises ParseError unless the root is a JSON object."""
    if not raw.strip():
        return {}
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        if not allow_comments:
            raise ParseError(f"invalid JSON: {exc}") from exc
        try:
            data = json.loads(strip_jsonc(raw))
        except json.JSONDecodeError as exc2:
            raise ParseError(f"invalid JSON: {exc2}") from exc2
    if not isinstance(data, dict):
        raise ParseError(f"expected a JSON object at the root, found {type(data).__name__}")
    return data


def read_text(path: Path) -> str:
    """Read a config file as UTF-8. Raises ParseError when it is not valid UTF-8."""
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise ParseError(f"not valid UTF-8: {exc.reason} at byte {exc.start}") from exc


def read_document(path: Path, allow_comments: bool = False) -> dict[str, Any]:
    """Read existing config or return empty structure.

    Absent, empty and malformed files (including invalid UTF-8) all come back
    as {}. First-run tools often have no file yet. Unreadable files
    (permissions) raise OSError.
    """
    try:
        return parse_document(read_text(path), allow_comments=allow_comments)
    except FileNotFoundError:
        return {}
    except ParseError as exc:
        logger.warning("Ignoring unparseable %s (%s); starting from an empty document", path, exc)
        return {}


def serialize_document(document: dict[str, Any]) -> str:
    return json.dumps(document, indent=2, ensure_ascii=False) + "\n"


def backup_document(path: Path) -> Path | None:
    """Copy the file to <name>.bak before modification. Returns backup path."""
    if not path.exists():
        return None
    backup = path.with_name(path.name + ".bak")
    try:
        shutil.copy2(path, backup)
    except OSError as exc:
        raise WriteError(f"could not back up {path}: {exc}", details={"path": str(path)}) from exc
    return backup


def write_document(path: Path, document: dict[str, Any]) -> None:
    """Write merged config back to disk (creates parent dirs if needed)."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(serialize_document(document), encoding="utf-8")
    except OSError as exc:
        raise WriteError(f"could not write {path}: {exc}", details={"path": str(path)}) from exc
