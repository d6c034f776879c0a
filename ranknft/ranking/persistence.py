"""Small JSON files written whole or not at all."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


def read_json(path: Path) -> Any | None:
    """Load a JSON document, or None when the file is missing or unreadable."""
    if not path.exists():
        return None
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except (OSError, ValueError) as e:
        logger.warning("Ignoring unreadable state file %s: %s", path, e)
        return None


class StagedWrite:
    """A complete temp file waiting to be renamed over its target."""

    def __init__(self, path: Path, tmp: Path) -> None:
        self.path = path
        self._tmp = tmp

    def apply(self) -> None:
        os.replace(self._tmp, self.path)

    def discard(self) -> None:
        self._tmp.unlink(missing_ok=True)


def stage_bytes(path: Path, payload: bytes) -> StagedWrite:
    """Write `payload` next to `path` without touching `path` itself."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(payload)
    except BaseException:
        Path(tmp).unlink(missing_ok=True)
        raise
    return StagedWrite(path, Path(tmp))


def stage_json(path: Path, data: Any) -> StagedWrite:
    return stage_bytes(path, json.dumps(data, indent=2).encode("utf-8"))


def write_json(path: Path, data: Any) -> None:
    """Write a JSON document via a temp file and atomic rename."""
    write_bytes(path, json.dumps(data, indent=2).encode("utf-8"))


def write_bytes(path: Path, payload: bytes) -> None:
    """Replace `path` with `payload`. Readers never see a partial file."""
    staged = stage_bytes(path, payload)
    try:
        staged.apply()
    except BaseException:
        staged.discard()
        raise
