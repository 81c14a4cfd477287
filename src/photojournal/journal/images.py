"""
Image store: photo files in one private directory.

Entries refer to photos by bare filename (a UUID, no extension). Every
operation here is fail-open: a photo that cannot be written yields no name,
and a photo that cannot be found or read is reported as absent. The
``*_result`` variants expose the underlying error for callers that care.
"""

from __future__ import annotations

import contextlib
import io
import uuid
from collections.abc import Iterable
from pathlib import Path

from loguru import logger
from PIL import Image, ImageOps, UnidentifiedImageError

from photojournal.core.exceptions import ImageStoreError
from photojournal.core.result import Result
from photojournal.core.types import PathLike

from .models import JournalEntry

DEFAULT_JPEG_QUALITY = 80

ImageInput = bytes | Image.Image


class ImageStore:
    """Writes, reads and deletes JPEG photos addressed by generated names."""

    def __init__(self, images_dir: PathLike, jpeg_quality: int = DEFAULT_JPEG_QUALITY):
        self.images_dir = Path(images_dir).expanduser()
        self.jpeg_quality = jpeg_quality

    # -- paths -------------------------------------------------------------

    def _path_for(self, name: str) -> Path | None:
        """Map a bare filename to its path, or None if the name is unsafe."""
        if not name or name in (".", "..") or "/" in name or "\\" in name or "\x00" in name:
            return None
        base = self.images_dir.resolve()
        path = (base / name).resolve()
        try:
            path.relative_to(base)
        except ValueError:
            return None
        return path

    def resolve(self, name: str) -> Path | None:
        """Return the file path for *name* if the file exists, else None."""
        path = self._path_for(name)
        if path is None or not path.is_file():
            return None
        return path

    def exists(self, name: str) -> bool:
        return self.resolve(name) is not None

    # -- write -------------------------------------------------------------

    def _encode(self, image: ImageInput) -> bytes:
        if isinstance(image, (bytes, bytearray)):
            img = Image.open(io.BytesIO(image))
            img.load()
        elif isinstance(image, Image.Image):
            img = image
        else:
            raise ImageStoreError(f"Unsupported image input: {type(image).__name__}")

        img = ImageOps.exif_transpose(img)
        if img.mode not in ("RGB", "L"):
            img = img.convert("RGB")

        buffer = io.BytesIO()
        img.save(buffer, format="JPEG", quality=self.jpeg_quality)
        return buffer.getvalue()

    def write_result(self, image: ImageInput) -> Result[str]:
        """Encode *image* as JPEG and store it under a fresh name."""
        try:
            data = self._encode(image)
        except ImageStoreError as e:
            return Result.failure(e)
        except (OSError, ValueError, UnidentifiedImageError) as e:
            return Result.failure(ImageStoreError(f"Cannot encode image: {e}"))

        name = str(uuid.uuid4())
        path = self.images_dir / name
        try:
            self.images_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            return Result.failure(ImageStoreError(f"Cannot create {self.images_dir}: {e}"))
        try:
            path.write_bytes(data)
        except OSError as e:
            # A partial file may or may not exist.
            with contextlib.suppress(OSError):
                path.unlink(missing_ok=True)
            return Result.failure(ImageStoreError(f"Cannot write {path}: {e}"))

        logger.debug(f"Stored image {name} ({len(data)} bytes)")
        return Result.success(name)

    def write(self, image: ImageInput) -> str | None:
        """Store *image* and return its name, or None if it could not be stored."""
        result = self.write_result(image)
        if not result.ok:
            logger.warning(f"Image not saved: {result.error}")
        return result.unwrap_or(None)

    # -- read --------------------------------------------------------------

    def read(self, name: str) -> bytes | None:
        """Return the stored bytes for *name*, or None if absent or unreadable."""
        path = self.resolve(name)
        if path is None:
            return None
        try:
            return path.read_bytes()
        except OSError as e:
            logger.warning(f"Cannot read image {name}: {e}")
            return None

    def open(self, name: str) -> Image.Image | None:
        """Return a decoded image for *name*, or None if absent or undecodable."""
        data = self.read(name)
        if data is None:
            return None
        try:
            img = Image.open(io.BytesIO(data))
            img.load()
            return img
        except (OSError, UnidentifiedImageError) as e:
            logger.warning(f"Cannot decode image {name}: {e}")
            return None

    # -- delete ------------------------------------------------------------

    def delete_result(self, name: str) -> Result[bool]:
        """Delete *name*. The value is True if a file was removed."""
        path = self._path_for(name)
        if path is None:
            return Result.failure(ImageStoreError(f"Invalid image name {name!r}"))
        try:
            path.unlink()
        except FileNotFoundError:
            return Result.success(False)
        except OSError as e:
            return Result.failure(ImageStoreError(f"Cannot delete {path}: {e}"))
        logger.debug(f"Deleted image {name}")
        return Result.success(True)

    def delete(self, name: str) -> bool:
        """Best-effort delete. Returns True only if a file was removed."""
        result = self.delete_result(name)
        if not result.ok:
            logger.warning(f"Image not deleted: {result.error}")
        return result.unwrap_or(False)

    def delete_many(self, names: Iterable[str]) -> list[str]:
        """Delete each of *names*; return the ones actually removed."""
        return [name for name in names if self.delete(name)]

    # -- maintenance -------------------------------------------------------

    def names(self) -> list[str]:
        """All stored image names, sorted."""
        if not self.images_dir.is_dir():
            return []
        return sorted(p.name for p in self.images_dir.iterdir() if p.is_file() and not p.name.startswith("."))

    def orphans(self, entries: Iterable[JournalEntry]) -> list[str]:
        """Stored names that no entry references."""
        referenced = {name for entry in entries for name in entry.image_names}
        return [name for name in self.names() if name not in referenced]

    def prune(self, entries: Iterable[JournalEntry]) -> list[str]:
        """Delete orphaned images; return the names removed."""
        removed = self.delete_many(self.orphans(entries))
        if removed:
            logger.info(f"Pruned {len(removed)} orphaned image(s)")
        return removed
