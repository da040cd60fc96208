"""Shared JSON source reading."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any


class SourceReadError(OSError):
    """Raised when a source document is missing, unreadable or malformed."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


def read_json_document(path: Path) -> Any:
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise SourceReadError(path, "file not found") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise SourceReadError(path, f"cannot read file ({exc})") from exc
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise SourceReadError(path, f"invalid JSON ({exc.msg} at line {exc.lineno})") from exc
    except (RecursionError, ValueError) as exc:
        raise SourceReadError(path, f"invalid JSON ({exc})") from exc
