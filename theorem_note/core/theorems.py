"""
Theorem Index Maintainer: 파일 쓰기마다 정리 인덱스 갱신.

인덱스 (.theorem-note/theorems.json):
- 정리 이름 → 선언한 파일의 경로, 이름당 경로 하나
- 키 정렬, indent 2 로 저장 (재읽기 안정, diff 친화)

갱신 순서 (update_theorem_index):
1. 내용에서 <theorem name="..."> 선언 추출
2. 선언 없음 → 디스크 I/O 없이 종료 (인덱스 파일 생성/수정 안 함)
3. 저장소 디렉터리 확보, 락 안에서 기존 인덱스 로드 (손상 시 DataCorruptionError)
4. 이 파일을 가리키던 항목 전부 제거
5. 추출한 이름 삽입 (같은 이름이 여러 번이면 뒤의 것이 이김)
6. 원자적 저장

내용 쓰기는 이 단계 이전에 끝나 있으며 인덱스 실패 시 롤백하지 않음.
"""

import logging
import os
from pathlib import Path

from theorem_note.core.paths import ensure_storage_dir, project_file_path
from theorem_note.core.storage import atomic_write_json, load_json, store_lock
from theorem_note.domain.constants import (
    DEFAULT_LOCK_TIMEOUT,
    THEOREM_TAG_PATTERN,
    THEOREMS_FILENAME,
)
from theorem_note.domain.errors import DataCorruptionError, ErrorCodes

logger = logging.getLogger(__name__)


def get_theorems_file_path(root_dir: str | Path) -> Path:
    """<root_dir>/.theorem-note/theorems.json (빈 root면 InvalidArgumentError)."""
    return project_file_path(root_dir, THEOREMS_FILENAME)


def extract_theorem_names(content: str) -> list[str]:
    """
    정리 선언 이름 추출.

    Args:
        content: 문서 내용

    Returns:
        문서 순서대로의 이름 목록 (중복 포함)
    """
    return [m.group(1) for m in THEOREM_TAG_PATTERN.finditer(content)]


def _read_index(index_path: Path) -> dict[str, str]:
    """
    인덱스 파일 엄격 로드.

    Raises:
        DataCorruptionError: THEOREM_INDEX_CORRUPT
    """
    try:
        data = load_json(index_path, allow_empty=True)
    except ValueError as e:
        raise DataCorruptionError(
            ErrorCodes.THEOREM_INDEX_CORRUPT,
            "theorem index is not valid JSON",
            path=str(index_path),
            error=str(e),
        ) from e

    if data is None:
        return {}

    if not isinstance(data, dict) or not all(
        isinstance(k, str) and isinstance(v, str) for k, v in data.items()
    ):
        raise DataCorruptionError(
            ErrorCodes.THEOREM_INDEX_CORRUPT,
            "theorem index must be an object of strings",
            path=str(index_path),
        )
    return data


def load_theorem_index(root_dir: str | Path) -> dict[str, str]:
    """
    프로젝트 정리 인덱스 로드.

    빈 root는 인덱스 없음으로 취급.

    Returns:
        이름 → 경로 (파일이 없으면 빈 dict)

    Raises:
        DataCorruptionError: THEOREM_INDEX_CORRUPT
    """
    if not str(root_dir):
        return {}
    return _read_index(get_theorems_file_path(root_dir))


def find_theorem(root_dir: str | Path, name: str) -> str | None:
    """정리 이름으로 선언 파일 경로 조회."""
    return load_theorem_index(root_dir).get(name)


def update_theorem_index(
    file_path: str | Path,
    content: str,
    root_dir: str | Path,
    lock_timeout: float = DEFAULT_LOCK_TIMEOUT,
) -> dict[str, str] | None:
    """
    쓰기된 파일 내용으로 인덱스 갱신.

    Args:
        file_path: 방금 쓴 파일 경로 (절대 경로로 정규화해 저장)
        content: 방금 쓴 내용
        root_dir: 프로젝트 루트
        lock_timeout: 인덱스 파일 락 대기 시간

    Returns:
        갱신된 인덱스. 선언이 없어 아무것도 하지 않았으면 None.

    Raises:
        InvalidArgumentError: 빈 root_dir (선언이 있을 때만)
        DataCorruptionError: 기존 인덱스 손상
        TheoremNoteError: 락/읽기/쓰기 실패
    """
    names = extract_theorem_names(content)
    if not names:
        return None

    ensure_storage_dir(root_dir)
    index_path = get_theorems_file_path(root_dir)
    # 인덱스 값은 항상 정규화된 절대 경로
    path_value = os.path.abspath(file_path)

    with store_lock(index_path, timeout=lock_timeout):
        index = _read_index(index_path)

        stale = [name for name, owner in index.items() if owner == path_value]
        for name in stale:
            del index[name]

        for name in names:
            index[name] = path_value

        atomic_write_json(index_path, index, sort_keys=True)

    logger.debug(
        f"Theorem index updated for {path_value}: "
        f"+{len(set(names))} -{len(set(stale) - set(names))} ({index_path})"
    )
    return dict(sorted(index.items()))
