"""Domain layer: interfaces, EOL policy and simple models (dataclasses)."""

from .eol_policy import EolStyle
from .interfaces import IAppConfig, IConfigService, IFileService, ISettingsService
from .models import (
    Document,
    EncodingKind,
    ReplaceRequest,
    ReplaceResult,
    SearchOptions,
    SearchRequest,
    SearchResult,
    TextEncoding,
)

__all__ = [
    "IFileService",
    "ISettingsService",
    "IConfigService",
    "IAppConfig",
    "Document",
    "EolStyle",
    "EncodingKind",
    "TextEncoding",
    "SearchOptions",
    "SearchRequest",
    "SearchResult",
    "ReplaceRequest",
    "ReplaceResult",
]
