"""
File Tree Builder: 디렉터리 재귀 스캔 → 정렬된 FileNode 트리.

정렬 규칙 (각 레벨 독립 적용):
1. 디렉터리가 파일보다 먼저
2. 같은 그룹 안에서는 이름의 대소문자 구분 사전순 (code point)

심볼릭 링크:
- 디렉터리를 가리키는 링크는 따라감
- 현재 하강 경로에 이미 있는 실제 경로(순환)는 children 없이 노드만 반환
- max_depth 초과 디렉터리도 children 없이 반환 (warning 로그)

UTF-8로 표현할 수 없는 이름(Linux의 surrogate escape)은 건너뜀 (warning 로그).

목록 실패(없음, 권한 거부 등)는 분류된 에러로 전파, 부분 트리 반환 없음.
"""

import logging
import os
from pathlib import Path

from theorem_note.domain.constants import DEFAULT_TREE_MAX_DEPTH
from theorem_note.domain.errors import from_os_error
from theorem_note.domain.schemas import FileNode

logger = logging.getLogger(__name__)


def sort_key(node: FileNode) -> tuple[bool, str]:
    """디렉터리 우선, 이후 이름순."""
    return (not node.is_directory, node.name)


def sort_nodes(nodes: list[FileNode]) -> list[FileNode]:
    """형제 노드 정렬 (새 리스트 반환)."""
    return sorted(nodes, key=sort_key)


def _real_path(path: Path) -> str:
    return os.path.realpath(path)


def _is_utf8_name(name: str) -> bool:
    try:
        name.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def _scan(
    directory: Path,
    depth: int,
    ancestors: frozenset[str],
    max_depth: int | None,
) -> list[FileNode]:
    try:
        with os.scandir(directory) as it:
            entries = list(it)
    except OSError as e:
        raise from_os_error(e, directory) from e

    nodes: list[FileNode] = []
    for entry in entries:
        entry_path = directory / entry.name
        if not _is_utf8_name(entry.name):
            logger.warning(f"Skipping entry with undecodable name: {entry_path!r}")
            continue

        try:
            is_dir = entry.is_dir()
        except OSError:
            is_dir = False

        if not is_dir:
            nodes.append(FileNode(name=entry.name, path=str(entry_path), is_directory=False))
            continue

        real = _real_path(entry_path)
        if real in ancestors:
            logger.warning(f"Symlink loop detected, not descending: {entry_path} -> {real}")
            children: list[FileNode] = []
        elif max_depth is not None and depth + 1 > max_depth:
            logger.warning(f"Max tree depth {max_depth} reached at {entry_path}")
            children = []
        else:
            children = _scan(entry_path, depth + 1, ancestors | {real}, max_depth)

        nodes.append(
            FileNode(
                name=entry.name,
                path=str(entry_path),
                is_directory=True,
                children=tuple(children),
            )
        )

    return sort_nodes(nodes)


def build_file_tree(
    path: str | Path,
    max_depth: int | None = DEFAULT_TREE_MAX_DEPTH,
) -> list[FileNode]:
    """
    디렉터리의 직계 자식을 FileNode 리스트로 반환 (하위 디렉터리는 재귀).

    Args:
        path: 스캔할 디렉터리 (절대 경로 권장, 노드 path는 이 값 기준으로 join)
        max_depth: 재귀 깊이 제한 (None이면 제한 없음)

    Returns:
        정렬된 최상위 노드 리스트

    Raises:
        NotFoundError: 디렉터리 없음
        PermissionDeniedError: 접근 거부
        FileSystemError: 그 밖의 목록 실패
    """
    root = Path(path)
    return _scan(root, 0, frozenset({_real_path(root)}), max_depth)


def tree_to_dicts(nodes: list[FileNode]) -> list[dict]:
    """트리 → JSON 직렬화용 dict 리스트."""
    return [node.to_dict() for node in nodes]
