"""
Local filesystem storage for uploaded documents.

Files are written to <root>/<session_id>/<document_id>-<sanitized filename>.

Dependencies: pathlib (stdlib)
System role: Document byte storage
"""

import logging
import re
from pathlib import Path
from uuid import UUID

from ragchat.core.exceptions import StorageError

logger = logging.getLogger(__name__)

_UNSAFE_FILENAME_CHARS = re.compile(r"[^a-zA-Z0-9._-]")


def sanitize_filename(filename: str) -> str:
    """Replace every character outside [a-zA-Z0-9._-] with an underscore."""
    return _UNSAFE_FILENAME_CHARS.sub("_", filename)


class LocalDocumentStorage:
    """Stores uploaded bytes under a root directory, one folder per session."""

    def __init__(self, root: str = "storage/session-docs") -> None:
        self._root = Path(root)

    @property
    def root(self) -> Path:
        return self._root

    def save(
        self,
        session_id: UUID,
        document_id: UUID,
        filename: str,
        data: bytes,
    ) -> str:
        """
        Write uploaded bytes to disk.

        Args:
            session_id: Owning session
            document_id: Document the file belongs to
            filename: Original filename (sanitized before use)
            data: File contents

        Returns:
            str: Path of the stored file

        Raises:
            StorageError: If the directory or file cannot be written
        """
        target_dir = self._root / str(session_id)
        target = target_dir / f"{document_id}-{sanitize_filename(filename)}"
        try:
            target_dir.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)
        except OSError as e:
            raise StorageError(
                "Failed to save uploaded file",
                details={"path": str(target), "error": str(e)},
            ) from e

        logger.info(f"{__name__}:save - Stored {len(data)} bytes at {target}")
        return str(target)

    def delete(self, path: str) -> None:
        """
        Remove a stored file. A missing file is not an error.

        Args:
            path: Stored file path
        """
        if not path:
            return
        try:
            Path(path).unlink(missing_ok=True)
        except OSError as e:
            logger.warning(f"{__name__}:delete - Could not delete {path}: {e}")
