"""Domain layer: constants, errors and schemas."""

from .errors import (
    AlreadyExistsError,
    DataCorruptionError,
    DirectoryPickCancelledError,
    ErrorCodes,
    FileSystemError,
    InvalidArgumentError,
    NotFoundError,
    PermissionDeniedError,
    TheoremNoteError,
)
from .schemas import FileNode, FontSettings, GlobalConfig, ProjectConfig

__all__ = [
    # errors
    "TheoremNoteError",
    "NotFoundError",
    "AlreadyExistsError",
    "InvalidArgumentError",
    "PermissionDeniedError",
    "DataCorruptionError",
    "FileSystemError",
    "DirectoryPickCancelledError",
    "ErrorCodes",
    # schemas
    "FileNode",
    "FontSettings",
    "ProjectConfig",
    "GlobalConfig",
]
