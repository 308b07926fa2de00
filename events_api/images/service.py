"""Categorized image library stored as plain files on disk."""

import logging
import re
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path, PurePath
from urllib.parse import quote

from events_api.config.settings import get_settings
from events_api.utils.errors import NotFound, ValidationError

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^a-zA-Z0-9_-]")


@dataclass(frozen=True)
class ImageCategory:
    id: str
    label: str
    description: str
    relative_path: str
    root: Path

    @property
    def directory(self) -> Path:
        return self.root / self.relative_path

    @property
    def public_path(self) -> str:
        return "/" + PurePath(self.relative_path).as_posix()


# id -> (label, description)
CATEGORY_DEFINITIONS: dict[str, tuple[str, str]] = {
    "alumni": ("Alumni & Students", "Images of SLU alumni, students, and engagement spotlights."),
    "employers": ("Employer Partners", "Logos and photography for DataNexus corporate partners."),
    "hero": ("Hero & Slider", "Hero banner imagery used throughout the experience."),
    "uploads": ("Custom Uploads", "General purpose uploads provided by administrators."),
}


def get_categories(root: Path | None = None) -> dict[str, ImageCategory]:
    root = root or get_settings().PUBLIC_DIR
    return {
        category_id: ImageCategory(category_id, label, description, f"assets/{category_id}", root)
        for category_id, (label, description) in CATEGORY_DEFINITIONS.items()
    }


def safe_filename(original: str | None) -> tuple[str, str]:
    """Split an upload name into a sanitized base and its extension."""
    name = PurePath(original or "upload").name
    path = PurePath(name)
    base = _UNSAFE_CHARS.sub("_", path.stem) or "image"
    return base, path.suffix or ".png"


class ImageLibrary:
    def __init__(self, categories: dict[str, ImageCategory]):
        self._categories = categories

    def ensure_directories(self) -> None:
        for category in self._categories.values():
            category.directory.mkdir(parents=True, exist_ok=True)

    def get_category(self, category_id: str) -> ImageCategory:
        category = self._categories.get(category_id)
        if category is None:
            raise NotFound(f'Image category "{category_id}" not found.')
        return category

    def describe(self, category_id: str) -> dict:
        category = self.get_category(category_id)
        return {
            "id": category.id,
            "label": category.label,
            "description": category.description,
            "primaryPath": category.public_path,
        }

    def list_files(self, category_id: str) -> list[dict]:
        category = self.get_category(category_id)
        if not category.directory.is_dir():
            return []

        files = []
        for entry in sorted(category.directory.iterdir(), key=lambda p: p.name):
            if entry.name.startswith(".") or not entry.is_file():
                continue
            files.append(self._file_info(category, entry))
        return files

    def list_categories(self) -> list[dict]:
        return [
            {
                "id": category.id,
                "label": category.label,
                "description": category.description,
                "count": len(self.list_files(category.id)),
                "publicPath": category.public_path,
            }
            for category in self._categories.values()
        ]

    def store(self, category_id: str, filename: str | None, data: bytes) -> dict:
        category = self.get_category(category_id)
        category.directory.mkdir(parents=True, exist_ok=True)

        base, extension = safe_filename(filename)
        target = category.directory / f"{base}{extension}"
        counter = 1
        while target.exists():
            target = category.directory / f"{base}_{int(time.time() * 1000)}_{counter}{extension}"
            counter += 1

        target.write_bytes(data)
        logger.info("Stored image %s in %s (%d bytes)", target.name, category_id, len(data))
        return self._file_info(category, target)

    def remove(self, category_id: str, filename: str) -> None:
        category = self.get_category(category_id)
        directory = category.directory.resolve()
        try:
            target = (directory / filename).resolve()
        except (OSError, ValueError):
            raise ValidationError("Invalid filename.")

        if target == directory or directory not in target.parents:
            raise ValidationError("Invalid filename.")
        if not target.is_file():
            raise NotFound(f'Image "{filename}" not found in category "{category_id}".')

        target.unlink()
        logger.info("Deleted image %s from %s", filename, category_id)

    @staticmethod
    def _file_info(category: ImageCategory, path: Path) -> dict:
        stats = path.stat()
        updated = datetime.fromtimestamp(stats.st_mtime, tz=timezone.utc)
        return {
            "filename": path.name,
            "size": stats.st_size,
            "updatedAt": updated.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            "url": f"{category.public_path}/{quote(path.name)}",
        }
