"""
MediaStore class for binary assets embedded in a package.

Images live under word/media/ with generated names (image1.png, image2.jpg,
...). The store assigns names from its own counter, separate from the
document's image ID counter, and keeps that counter ahead of any names it
re-registers from an existing package.
"""

from __future__ import annotations

import logging
import posixpath
import re
from dataclasses import dataclass

from .constants import MEDIA_DIR
from .content_types import ContentTypes, content_type_for_extension
from .errors import NotFoundError, ValidationError
from .ids import IDGenerator, IDKind
from .locks import ReadWriteLock

logger = logging.getLogger(__name__)

# In-package prefix for media parts
MEDIA_PREFIX = f"word/{MEDIA_DIR}/"

_GENERATED_NAME_RE = re.compile(r"^image(\d+)(\.[^.]*)?$", re.IGNORECASE)


@dataclass(frozen=True)
class MediaFile:
    """A stored asset.

    Attributes:
        id: Media ID from the document's image counter (e.g., "img1")
        name: File name inside word/media (e.g., "image1.png")
        path: Full in-package path (e.g., "word/media/image1.png")
        content_type: MIME type derived from the extension
        data: The raw bytes
    """

    id: str
    name: str
    path: str
    content_type: str
    data: bytes

    @property
    def extension(self) -> str:
        """Lower-case extension without the dot."""
        return posixpath.splitext(self.name)[1].lstrip(".").lower()

    @property
    def relationship_target(self) -> str:
        """Target path relative to word/document.xml (e.g., "media/image1.png")."""
        return self.path[len("word/") :] if self.path.startswith("word/") else self.path


class MediaStore:
    """Stores image payloads for one document.

    Every ``add`` stores a separate copy under a new name; identical bytes
    added twice produce two parts.

    Example:
        >>> store = MediaStore(IDGenerator())
        >>> media_id, path = store.add(png_bytes, "logo.png")
        >>> path
        'word/media/image1.png'
    """

    def __init__(self, id_generator: IDGenerator) -> None:
        self._ids = id_generator
        self._files: dict[str, MediaFile] = {}
        self._counter = 0
        self._lock = ReadWriteLock()

    def add(self, data: bytes, filename: str) -> tuple[str, str]:
        """Store a new asset.

        Args:
            data: The raw bytes
            filename: Original file name; only its extension is used

        Returns:
            Tuple of (media ID, in-package path)

        Raises:
            ValidationError: If data or filename is empty, or the extension
                is not a supported image type
        """
        if not data:
            raise ValidationError("MediaStore.add", "data", b"", "media data cannot be empty")
        if not filename:
            raise ValidationError("MediaStore.add", "filename", filename, "filename cannot be empty")

        ext = posixpath.splitext(filename.replace("\\", "/"))[1].lower()
        if ext.lstrip(".") not in ContentTypes.IMAGE_EXTENSION_MAP:
            raise ValidationError(
                "MediaStore.add", "filename", filename, f"unsupported media extension {ext or '(none)'}"
            )
        content_type = content_type_for_extension(ext)

        with self._lock.write():
            media_id = self._ids.next_image_id()
            self._counter += 1
            name = f"image{self._counter}{ext}"
            path = f"{MEDIA_PREFIX}{name}"
            self._files[media_id] = MediaFile(media_id, name, path, content_type, bytes(data))

        logger.debug(f"Stored media {media_id} at {path} ({content_type}, {len(data)} bytes)")
        return media_id, path

    def register_existing(
        self,
        media_id: str,
        path: str,
        content_type: str,
        data: bytes,
    ) -> str:
        """Register an asset already present in a package.

        The original path and name are kept. Both the name counter and the
        document's image ID counter are advanced past the numbers in use.

        Args:
            media_id: ID to register under; a new one is minted if empty
            path: In-package path (a bare name is placed under word/media/)
            content_type: MIME type; derived from the extension if empty
            data: The raw bytes

        Returns:
            The media ID the asset was registered under

        Raises:
            ValidationError: If data or path is empty
        """
        op = "MediaStore.register_existing"
        if not data:
            raise ValidationError(op, "data", b"", "media data cannot be empty")
        if not path or not path.strip():
            raise ValidationError(op, "path", path, "media path cannot be empty")

        normalized = path.replace("\\", "/").strip().lstrip("/")
        if not normalized.startswith(MEDIA_PREFIX):
            normalized = f"{MEDIA_PREFIX}{posixpath.basename(normalized)}"
        name = posixpath.basename(normalized)
        if not content_type:
            content_type = content_type_for_extension(posixpath.splitext(name)[1])

        with self._lock.write():
            if media_id:
                self._ids.advance_past(IDKind.IMAGE, media_id)
            else:
                media_id = self._ids.next_image_id()
            match = _GENERATED_NAME_RE.match(name)
            if match and int(match.group(1)) > self._counter:
                self._counter = int(match.group(1))
            self._files[media_id] = MediaFile(media_id, name, normalized, content_type, bytes(data))

        logger.debug(f"Registered existing media {media_id} at {normalized}")
        return media_id

    def delete(self, media_id: str) -> None:
        """Remove an asset by ID.

        Raises:
            NotFoundError: If no asset has this ID
        """
        with self._lock.write():
            if media_id not in self._files:
                raise NotFoundError("MediaStore.delete", f"media file {media_id!r}")
            del self._files[media_id]
        logger.debug(f"Removed media {media_id}")

    def get(self, media_id: str) -> MediaFile:
        """Get an asset by ID.

        Raises:
            NotFoundError: If no asset has this ID
        """
        with self._lock.read():
            media = self._files.get(media_id)
        if media is None:
            raise NotFoundError("MediaStore.get", f"media file {media_id!r}")
        return media

    def get_by_path(self, path: str) -> MediaFile:
        """Get an asset by in-package path.

        Raises:
            NotFoundError: If no asset is stored at this path
        """
        with self._lock.read():
            for media in self._files.values():
                if media.path == path:
                    return media
        raise NotFoundError("MediaStore.get_by_path", f"media file at {path!r}")

    def all(self) -> list[MediaFile]:
        """Return every asset in insertion order."""
        with self._lock.read():
            return list(self._files.values())

    def count(self) -> int:
        with self._lock.read():
            return len(self._files)

    def __len__(self) -> int:
        return self.count()
