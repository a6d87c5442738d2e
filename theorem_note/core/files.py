"""
File Mutation Operations: 읽기/쓰기/생성.

- write_file: 내용 쓰기 후 정리 인덱스 갱신 (root가 비어 있으면 인덱싱 생략)
- create_file / create_directory: 존재 확인 후 생성
  (exists → create 사이 TOCTOU 경쟁 있음, 단일 사용자 데스크톱 전제)
"""

import logging
from pathlib import Path

from theorem_note.core.theorems import update_theorem_index
from theorem_note.domain.constants import DEFAULT_LOCK_TIMEOUT
from theorem_note.domain.errors import (
    AlreadyExistsError,
    ErrorCodes,
    FileSystemError,
    from_os_error,
)

logger = logging.getLogger(__name__)


def read_file(path: str | Path) -> str:
    """
    파일 전체 내용 읽기 (UTF-8).

    Raises:
        NotFoundError, PermissionDeniedError, FileSystemError
    """
    try:
        with open(path, encoding="utf-8", newline="") as f:
            return f.read()
    except OSError as e:
        raise from_os_error(e, path) from e
    except UnicodeDecodeError as e:
        raise FileSystemError(
            ErrorCodes.FILESYSTEM_ERROR,
            "file is not valid UTF-8 text",
            path=str(path),
        ) from e


def write_file(
    path: str | Path,
    content: str,
    root_dir: str | Path = "",
    lock_timeout: float = DEFAULT_LOCK_TIMEOUT,
) -> dict[str, str] | None:
    """
    파일 쓰기 + 정리 인덱스 갱신.

    Args:
        path: 대상 파일
        content: 새 내용
        root_dir: 프로젝트 루트 (빈 값이면 인덱스 갱신 안 함)
        lock_timeout: 인덱스 락 대기 시간

    Returns:
        갱신된 정리 인덱스, 갱신이 없었으면 None

    Raises:
        TheoremNoteError: 내용 쓰기 실패 또는 인덱스 갱신 실패
            (후자의 경우 이미 쓴 내용은 유지됨)
    """
    try:
        Path(path).write_text(content, encoding="utf-8", newline="")
    except OSError as e:
        raise from_os_error(e, path) from e

    if not str(root_dir):
        return None

    return update_theorem_index(path, content, root_dir, lock_timeout=lock_timeout)


def _ensure_absent(path: Path) -> None:
    # 깨진 심볼릭 링크도 점유로 취급
    if path.exists() or path.is_symlink():
        raise AlreadyExistsError(
            ErrorCodes.FILE_EXISTS,
            "path already exists",
            path=str(path),
        )


def create_file(path: str | Path) -> None:
    """
    빈 파일 생성.

    Raises:
        AlreadyExistsError: 경로가 이미 점유됨 (기존 내용 유지)
        TheoremNoteError: 생성 실패
    """
    target = Path(path)
    _ensure_absent(target)
    try:
        target.write_text("", encoding="utf-8")
    except OSError as e:
        raise from_os_error(e, target) from e
    logger.info(f"Created file {target}")


def create_directory(path: str | Path) -> None:
    """
    디렉터리 생성 (한 단계, 부모는 존재해야 함).

    Raises:
        AlreadyExistsError: 경로가 이미 점유됨
        NotFoundError: 부모 디렉터리 없음
    """
    target = Path(path)
    _ensure_absent(target)
    try:
        target.mkdir()
    except OSError as e:
        raise from_os_error(e, target) from e
    logger.info(f"Created directory {target}")
