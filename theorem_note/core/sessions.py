"""
Session Store: 프로젝트별 열린 탭 목록 (.theorem-note/session.json).

- save: 호출자가 준 순서 그대로 저장 (중복 제거/정렬 없음), 통째로 교체
- load: 빈 root 또는 파일 없음 → 빈 리스트
- 손상 시 엄격한 정책: DataCorruptionError
"""

import logging
from pathlib import Path

from theorem_note.core.paths import ensure_storage_dir, project_file_path
from theorem_note.core.storage import atomic_write_json, load_json, store_lock
from theorem_note.domain.constants import DEFAULT_LOCK_TIMEOUT, SESSION_FILENAME
from theorem_note.domain.errors import DataCorruptionError, ErrorCodes

logger = logging.getLogger(__name__)


def get_session_file_path(root_dir: str | Path) -> Path:
    """<root_dir>/.theorem-note/session.json (빈 root면 InvalidArgumentError)."""
    return project_file_path(root_dir, SESSION_FILENAME)


def save_session(
    root_dir: str | Path,
    file_paths: list[str],
    lock_timeout: float = DEFAULT_LOCK_TIMEOUT,
) -> Path:
    """
    세션 저장.

    Args:
        root_dir: 프로젝트 루트
        file_paths: 열린 파일 경로 (순서 유지)
        lock_timeout: 세션 파일 락 대기 시간

    Returns:
        저장된 세션 파일 경로

    Raises:
        InvalidArgumentError: EMPTY_ROOT_DIR
        TheoremNoteError: 락/쓰기 실패
    """
    ensure_storage_dir(root_dir)
    session_path = get_session_file_path(root_dir)

    with store_lock(session_path, timeout=lock_timeout):
        atomic_write_json(session_path, [str(p) for p in file_paths])

    logger.debug(f"Saved session with {len(file_paths)} file(s) to {session_path}")
    return session_path


def load_session(root_dir: str | Path) -> list[str]:
    """
    세션 로드.

    Returns:
        저장된 파일 경로 목록 (없으면 빈 리스트)

    Raises:
        DataCorruptionError: SESSION_CORRUPT (JSON 문자열 배열이 아님)
    """
    if not str(root_dir):
        return []

    session_path = get_session_file_path(root_dir)
    try:
        data = load_json(session_path)
    except ValueError as e:
        raise DataCorruptionError(
            ErrorCodes.SESSION_CORRUPT,
            "session file is not valid JSON",
            path=str(session_path),
            error=str(e),
        ) from e

    if data is None:
        return []

    if not isinstance(data, list) or not all(isinstance(p, str) for p in data):
        raise DataCorruptionError(
            ErrorCodes.SESSION_CORRUPT,
            "session file must be a JSON array of strings",
            path=str(session_path),
        )
    return data
