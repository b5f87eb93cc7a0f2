"""Local JSON file storage with atomic replace.

Absent and corrupt files are expected conditions (first start, interrupted
operator edits) and read back as ``None``. Any other ``OSError`` propagates.
"""

from __future__ import annotations

import asyncio
import contextlib
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

_logger = logging.getLogger(__name__)

StrPath = str | os.PathLike[str]


def read_json_file(path: StrPath) -> Any | None:
    """Return the parsed content of *path*, or ``None`` if absent or corrupt."""
    try:
        with open(path, encoding="utf-8") as fh:
            raw = fh.read()
    except FileNotFoundError:
        _logger.error("No JSON file found at %s", path)
        return None
    except UnicodeDecodeError:
        _logger.error("File at %s is not valid UTF-8", path)
        return None

    try:
        return json.loads(raw)
    except (json.JSONDecodeError, RecursionError) as exc:
        _logger.error("Malformed JSON file at %s: %s", path, exc)
        return None


def write_json_file(path: StrPath, document: Any) -> None:
    """Serialize *document* to *path*.

    The content is written to a temporary file in the same directory and
    moved over the target with :func:`os.replace`, so readers only ever see
    the old file or the complete new one.
    """
    target = Path(path)
    payload = json.dumps(document, ensure_ascii=False)
    target.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_path = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=target.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            fh.write(payload)
            fh.flush()
            os.fsync(fh.fileno())
        os.replace(tmp_path, target)
    except BaseException:
        with contextlib.suppress(FileNotFoundError):
            os.unlink(tmp_path)
        raise


async def async_read_json_file(path: StrPath) -> Any | None:
    return await asyncio.to_thread(read_json_file, path)


async def async_write_json_file(path: StrPath, document: Any) -> None:
    await asyncio.to_thread(write_json_file, path, document)
