from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional


@dataclass(frozen=True)
class SourceLocation:
    file_path: Optional[Path] = None
    yaml_path: Optional[str] = None
    line: Optional[int] = None  # 1-based
    column: Optional[int] = None  # 1-based


def to_json_pointer(path: Optional[str]) -> Optional[str]:
    """Convert a dotted issue path (``platforms.cursor.globs``) to a JSON pointer."""
    if not path:
        return None
    if path.startswith("/"):
        return path
    return "/" + "/".join(token.replace("~", "~0").replace("/", "~1") for token in path.split("."))


def lookup_source(source_map: Optional[Dict[str, Dict[str, int]]], yaml_path: Optional[str]) -> SourceLocation:
    """Resolve *yaml_path* to a line/column, walking up to the closest known parent."""
    pointer = to_json_pointer(yaml_path)
    if not source_map or not pointer:
        return SourceLocation(yaml_path=yaml_path)

    candidate = pointer
    while candidate:
        entry = source_map.get(candidate)
        if entry:
            return SourceLocation(
                yaml_path=yaml_path,
                line=entry.get("line"),
                column=entry.get("column"),
            )
        candidate = candidate.rsplit("/", 1)[0]

    return SourceLocation(yaml_path=yaml_path)


def format_source(loc: Optional[SourceLocation]) -> str:
    if not loc:
        return ""

    parts = []
    if loc.file_path is not None:
        if loc.line is not None and loc.column is not None:
            parts.append(f"{loc.file_path}:{loc.line}:{loc.column}")
        elif loc.line is not None:
            parts.append(f"{loc.file_path}:{loc.line}")
        else:
            parts.append(str(loc.file_path))
    elif loc.line is not None:
        parts.append(f"line {loc.line}")

    if not parts:
        return ""

    return " (" + " ".join(parts) + ")"
