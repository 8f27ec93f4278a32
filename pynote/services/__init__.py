"""Concrete service implementations and the pure document/search core."""

from .document_service import DocumentService, LoadCancelledError, LoadedDocument
from .file_service import FileService
from .settings_service import SettingsService

__all__ = [
    "DocumentService",
    "FileService",
    "LoadCancelledError",
    "LoadedDocument",
    "SettingsService",
]
