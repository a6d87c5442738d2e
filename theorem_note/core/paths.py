"""
프로젝트 저장소 경로.

<project_root>/.theorem-note/<filename>
빈 project root는 항상 InvalidArgumentError.
"""

from pathlib import Path

from theorem_note.domain.constants import STORAGE_DIR_NAME
from theorem_note.domain.errors import ErrorCodes, InvalidArgumentError, from_os_error


def _require_root(root_dir: str | Path) -> Path:
    if not str(root_dir):
        raise InvalidArgumentError(
            ErrorCodes.EMPTY_ROOT_DIR,
            "project root directory is required",
        )
    return Path(root_dir)


def get_storage_dir(root_dir: str | Path) -> Path:
    """
    프로젝트 저장소 디렉터리 경로.

    Args:
        root_dir: 프로젝트 루트

    Returns:
        <root_dir>/.theorem-note

    Raises:
        InvalidArgumentError: EMPTY_ROOT_DIR
    """
    return _require_root(root_dir) / STORAGE_DIR_NAME


def project_file_path(root_dir: str | Path, filename: str) -> Path:
    """<root_dir>/.theorem-note/<filename> (빈 root면 InvalidArgumentError)."""
    return get_storage_dir(root_dir) / filename


def ensure_storage_dir(root_dir: str | Path) -> Path:
    """
    프로젝트 저장소 디렉터리 생성 (이미 있으면 그대로).

    Returns:
        저장소 디렉터리 경로

    Raises:
        InvalidArgumentError: EMPTY_ROOT_DIR
        TheoremNoteError: 생성 실패
    """
    storage_dir = get_storage_dir(root_dir)
    try:
        storage_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise from_os_error(e, storage_dir) from e
    return storage_dir
