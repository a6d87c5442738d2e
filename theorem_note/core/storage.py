"""
JSON 저장소 공통: 파일 락 + 원자적 쓰기 + 읽기.

규칙:
- 저장소 파일 하나당 락 하나: <file>.lock (filelock)
- read-modify-write 전체를 락으로 감쌈
- 원자적 쓰기: temp → rename + fsync
- 읽기는 락 없이 수행 (rename으로 교체되므로 중간 상태 없음)
- 파싱 실패 정책(관대/엄격)은 호출하는 저장소가 결정

파일시스템 안정성 (best-effort):
- fsync 실패 시 경고 남기고 계속 진행
- 실패 시 temp 파일 정리, 원본 유지
"""

import json
import logging
import os
import tempfile
from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

from filelock import FileLock, Timeout

from theorem_note.domain.constants import DEFAULT_LOCK_TIMEOUT, LOCK_SUFFIX
from theorem_note.domain.errors import ErrorCodes, FileSystemError, from_os_error

logger = logging.getLogger(__name__)

# =============================================================================
# Lock Management
# =============================================================================


def lock_path_for(path: Path) -> Path:
    """저장소 파일의 락 파일 경로."""
    return path.with_name(path.name + LOCK_SUFFIX)


@contextmanager
def store_lock(
    path: Path, timeout: float = DEFAULT_LOCK_TIMEOUT
) -> Generator[Path, None, None]:
    """
    저장소 파일 단위 락.

    사용법:
        with store_lock(theorems_path):
            # 읽기 → 수정 → atomic_write_json

    Args:
        path: 보호할 저장소 파일 경로 (부모 디렉터리가 존재해야 함)
        timeout: 락 대기 시간 (초)

    Yields:
        락 파일 경로

    Raises:
        FileSystemError: STORE_LOCK_TIMEOUT
    """
    lock_file = lock_path_for(path)
    lock = FileLock(lock_file, timeout=timeout)

    try:
        lock.acquire()
    except Timeout as e:
        raise FileSystemError(
            ErrorCodes.STORE_LOCK_TIMEOUT,
            f"Failed to acquire lock for '{path.name}'",
            path=str(path),
            timeout=timeout,
        ) from e
    except OSError as e:
        raise from_os_error(e, lock_file) from e

    try:
        yield lock_file
    finally:
        lock.release()


# =============================================================================
# Atomic Write
# =============================================================================


def _fsync_dir(dir_path: Path) -> None:
    """
    디렉토리 fsync (가능한 환경에서).

    rename 후 디렉토리 엔트리까지 내구성을 강화하려면 필요.
    Windows 등 O_DIRECTORY 미지원 환경에서는 경고만 남김.
    """
    try:
        dir_fd = os.open(str(dir_path), os.O_RDONLY | os.O_DIRECTORY)
        try:
            os.fsync(dir_fd)
        finally:
            os.close(dir_fd)
    except (OSError, AttributeError) as e:
        logger.debug(f"Directory fsync skipped for {dir_path}: {e}")


def atomic_write_json(path: Path, data: Any, sort_keys: bool = False) -> None:
    """
    원자적 JSON 쓰기.

    동작:
    - 중간 상태 없음: temp → rename
    - 가능한 환경에서 내구성 강화: 파일 fsync + 디렉토리 fsync
    - 실패 시 cleanup: temp 파일 삭제, 기존 파일 보존

    Args:
        path: 저장할 파일 경로
        data: JSON 직렬화할 데이터
        sort_keys: 키 정렬 여부 (diff 친화적 출력)

    Raises:
        TypeError: 직렬화 불가 데이터
        TheoremNoteError: OS 수준 쓰기 실패 (from_os_error 분류)
    """
    dir_path = path.parent

    temp_path = None
    try:
        dir_path.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            mode="w",
            dir=dir_path,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
        ) as f:
            temp_path = Path(f.name)
            json.dump(data, f, indent=2, ensure_ascii=False, sort_keys=sort_keys)
            f.flush()
            try:
                os.fsync(f.fileno())
            except OSError as e:
                logger.warning(
                    f"File fsync failed for {path}: {e}. "
                    f"Data may not be durable on power loss."
                )

        os.replace(temp_path, path)
        _fsync_dir(dir_path)

    except BaseException as e:
        if temp_path and temp_path.exists():
            try:
                temp_path.unlink()
            except OSError:
                logger.warning(f"Failed to remove temp file {temp_path}")
        if isinstance(e, OSError):
            raise from_os_error(e, path) from e
        raise


# =============================================================================
# Read
# =============================================================================


def load_json(path: Path, allow_empty: bool = False) -> Any | None:
    """
    JSON 파일 로드.

    Args:
        path: 파일 경로
        allow_empty: True면 빈 파일(공백만 포함)을 None으로 취급

    Returns:
        파싱된 데이터. 파일이 없으면 None.

    Raises:
        json.JSONDecodeError: 파싱 실패 (정책은 호출자가 결정)
        TheoremNoteError: OS 수준 읽기 실패
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None
    except OSError as e:
        raise from_os_error(e, path) from e

    if allow_empty and not text.strip():
        return None
    return json.loads(text)
