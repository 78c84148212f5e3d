"""Timestamp and file helpers."""

import json
import logging
import shutil
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


def iso_timestamp(moment: datetime | None = None) -> str:
    """ISO-8601 UTC timestamp with millisecond precision and a ``Z`` suffix."""
    moment = moment or datetime.now(UTC)
    return moment.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def safe_timestamp(moment: datetime | None = None) -> str:
    """Timestamp usable as a directory name (``:`` and ``.`` replaced by ``-``)."""
    return iso_timestamp(moment).replace(":", "-").replace(".", "-")


def write_json(path: Path, data: Any) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")
    return path


def copy_files(source_dir: Path, dest_dir: Path) -> int:
    """Copy the regular files of ``source_dir`` into ``dest_dir``, overwriting.

    Returns the number of files copied. A missing source directory copies
    nothing.
    """
    if not source_dir.is_dir():
        return 0
    dest_dir.mkdir(parents=True, exist_ok=True)
    copied = 0
    for path in sorted(source_dir.iterdir()):
        if path.is_file():
            shutil.copy2(path, dest_dir / path.name)
            copied += 1
    return copied
