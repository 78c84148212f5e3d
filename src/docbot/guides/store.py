"""Read access to the published guide directory, plus atomic saves."""

import logging
import os
import re
from pathlib import Path

from pydantic import ValidationError

from .models import Guide, GuideMetadata
from .search import search_guides

logger = logging.getLogger(__name__)

_SAFE_NAME_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_-]{0,127}$")
_SAFE_FILE_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_.-]{0,127}$")


def is_safe_name(name: str) -> bool:
    """Whether ``name`` can be used as a single path component."""
    return bool(name) and _SAFE_NAME_RE.fullmatch(name) is not None


def atomic_write_text(path: Path, content: str) -> None:
    """Write ``content`` via temp file + fsync + rename."""
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.parent / f".{path.name}.tmp.{os.getpid()}"
    try:
        with tmp_path.open("w", encoding="utf-8") as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise


class GuideStore:
    """Guides stored as ``<directory>/<id>.json`` with images under ``<directory>/images/<id>/``.

    Reads never raise for missing or damaged files: they are logged and treated
    as absent.
    """

    def __init__(self, directory: str | Path):
        self.directory = Path(directory).expanduser()
        logger.debug(f"Guides directory: {self.directory}")

    @property
    def images_dir(self) -> Path:
        return self.directory / "images"

    def _guide_path(self, guide_id: str) -> Path:
        return self.directory / f"{guide_id}.json"

    def _read(self, path: Path) -> Guide | None:
        try:
            return Guide.model_validate_json(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Could not read guide file {path}: {e}")
        except ValidationError as e:
            logger.warning(f"Invalid guide file {path}: {e.error_count()} validation error(s)")
        return None

    def list_all(self) -> list[Guide]:
        """Every parsable guide in the directory, ordered by file name."""
        if not self.directory.is_dir():
            logger.warning(f"Guides directory not found: {self.directory}")
            return []

        files = sorted(p for p in self.directory.glob("*.json") if p.is_file())
        if not files:
            logger.warning(f"Guides directory is empty: {self.directory}")
            return []

        guides = []
        for path in files:
            guide = self._read(path)
            if guide is not None:
                guides.append(guide)
        return guides

    def list_metadata(self) -> list[GuideMetadata]:
        return [guide.metadata for guide in self.list_all()]

    def get(self, guide_id: str) -> Guide | None:
        """Guide by id, or ``None`` if the id is invalid, missing or unparsable."""
        if not is_safe_name(guide_id):
            logger.debug(f"Rejected guide id: {guide_id!r}")
            return None
        path = self._guide_path(guide_id)
        if not path.is_file():
            return None
        return self._read(path)

    def search(self, query: str) -> list[GuideMetadata]:
        return search_guides(self.list_metadata(), query)

    def save(self, guide: Guide) -> Path:
        """Write a guide atomically, replacing any guide with the same id."""
        if not is_safe_name(guide.id):
            raise ValueError(f"Invalid guide id {guide.id!r}")
        path = self._guide_path(guide.id)
        atomic_write_text(path, guide.to_json())
        logger.info(f"Saved guide: {guide.id} to {path}")
        return path

    def image_path(self, flow_id: str, filename: str) -> Path | None:
        """Published screenshot path, or ``None`` for unsafe names and missing files."""
        if not is_safe_name(flow_id) or not _SAFE_FILE_RE.fullmatch(filename) or ".." in filename:
            return None
        path = self.images_dir / flow_id / filename
        return path if path.is_file() else None
