"""Uploaded file storage boundary."""

from ragchat.boundary.storage.local_storage import LocalDocumentStorage, sanitize_filename

__all__ = ["LocalDocumentStorage", "sanitize_filename"]
