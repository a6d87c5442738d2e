"""
Core layer: 파일 시스템과 저장소.

역할:
- 파일 트리 스캔, 파일 읽기/쓰기/생성
- 정리 인덱스 갱신
- 세션/설정 저장소 (락 + 원자적 쓰기)
"""

from .events import EventBus
from .file_tree import build_file_tree, sort_nodes
from .files import create_directory, create_file, read_file, write_file
from .paths import ensure_storage_dir, get_storage_dir
from .sessions import get_session_file_path, load_session, save_session
from .settings import (
    GlobalConfigStore,
    get_font_settings,
    get_project_config_path,
    load_project_config,
    save_font_settings,
    save_project_config,
)
from .storage import atomic_write_json, load_json, store_lock
from .theorems import (
    extract_theorem_names,
    find_theorem,
    get_theorems_file_path,
    load_theorem_index,
    update_theorem_index,
)

__all__ = [
    # storage
    "store_lock",
    "atomic_write_json",
    "load_json",
    # paths
    "get_storage_dir",
    "ensure_storage_dir",
    # file_tree
    "build_file_tree",
    "sort_nodes",
    # files
    "read_file",
    "write_file",
    "create_file",
    "create_directory",
    # theorems
    "extract_theorem_names",
    "update_theorem_index",
    "load_theorem_index",
    "find_theorem",
    "get_theorems_file_path",
    # sessions
    "get_session_file_path",
    "save_session",
    "load_session",
    # settings
    "GlobalConfigStore",
    "get_project_config_path",
    "load_project_config",
    "save_project_config",
    "get_font_settings",
    "save_font_settings",
    # events
    "EventBus",
]
