"""
Workspace: 표시 계층이 호출하는 백엔드 진입점.

core 함수들을 묶고, 여러 저장소에 걸친 흐름만 여기서 조율:
- 새 디렉터리 열기: 선택 → 스캔 → last-opened 기록 (성공 시 정확히 한 번)
- 트리 새로고침: 스캔만 (전역 설정 건드리지 않음)
- 폰트 설정 저장: load → merge → save → 이벤트 발행
"""

import logging

from theorem_note.app.pickers import DirectoryPicker
from theorem_note.core import (
    EventBus,
    GlobalConfigStore,
    build_file_tree,
    create_directory,
    create_file,
    find_theorem,
    get_font_settings,
    load_session,
    load_theorem_index,
    read_file,
    save_font_settings,
    save_session,
    write_file,
)
from theorem_note.domain.constants import (
    DEFAULT_LOCK_TIMEOUT,
    DEFAULT_TREE_MAX_DEPTH,
    DIRECTORY_PICKER_TITLE,
    EVENT_FONT_SETTINGS_UPDATED,
)
from theorem_note.domain.schemas import FileNode, FontSettings

logger = logging.getLogger(__name__)


class Workspace:
    """
    백엔드 파사드.

    GlobalConfigStore는 시작 시 한 번 만들어 주입받음 (모듈 전역 상태 없음).
    """

    def __init__(
        self,
        global_store: GlobalConfigStore,
        events: EventBus | None = None,
        tree_max_depth: int | None = DEFAULT_TREE_MAX_DEPTH,
        lock_timeout: float = DEFAULT_LOCK_TIMEOUT,
    ):
        self.global_store = global_store
        self.events = events or EventBus()
        self.tree_max_depth = tree_max_depth
        self.lock_timeout = lock_timeout

    # =========================================================================
    # File Tree
    # =========================================================================

    def open_new_directory(self, picker: DirectoryPicker) -> tuple[str, list[FileNode]]:
        """
        디렉터리 선택 후 트리 반환, last-opened 기록.

        취소나 스캔 실패 시 last-opened는 바뀌지 않음.

        Returns:
            (선택된 경로, 트리)

        Raises:
            DirectoryPickCancelledError: 선택 취소
            TheoremNoteError: 스캔 실패
        """
        path = picker.pick(DIRECTORY_PICKER_TITLE)
        tree = build_file_tree(path, max_depth=self.tree_max_depth)
        self.global_store.set_last_opened(path)
        logger.info(f"Opened directory {path} ({len(tree)} top-level entries)")
        return path, tree

    def get_file_tree(self, path: str) -> list[FileNode]:
        """이미 열린 디렉터리 새로고침."""
        return build_file_tree(path, max_depth=self.tree_max_depth)

    # =========================================================================
    # Files
    # =========================================================================

    def read_file(self, path: str) -> str:
        return read_file(path)

    def write_file(self, path: str, content: str, root_dir: str = "") -> dict[str, str] | None:
        return write_file(path, content, root_dir, lock_timeout=self.lock_timeout)

    def create_file(self, path: str) -> None:
        create_file(path)

    def create_directory(self, path: str) -> None:
        create_directory(path)

    # =========================================================================
    # Global Settings
    # =========================================================================

    def get_last_opened(self) -> str:
        return self.global_store.get_last_opened()

    def set_last_opened(self, path: str) -> None:
        self.global_store.set_last_opened(path)

    # =========================================================================
    # Session
    # =========================================================================

    def save_session(self, root_dir: str, file_paths: list[str]) -> None:
        save_session(root_dir, file_paths, lock_timeout=self.lock_timeout)

    def load_session(self, root_dir: str) -> list[str]:
        return load_session(root_dir)

    # =========================================================================
    # Project Settings
    # =========================================================================

    def get_font_settings(self, root_dir: str) -> FontSettings:
        return get_font_settings(root_dir)

    def save_font_settings(self, root_dir: str, settings: FontSettings) -> FontSettings:
        """
        폰트 설정 저장 후 font-settings-updated 발행.

        Raises:
            InvalidArgumentError: 빈 root_dir
        """
        save_font_settings(root_dir, settings, lock_timeout=self.lock_timeout)
        self.events.emit(EVENT_FONT_SETTINGS_UPDATED, settings.to_dict())
        return settings

    # =========================================================================
    # Theorems
    # =========================================================================

    def list_theorems(self, root_dir: str) -> dict[str, str]:
        return load_theorem_index(root_dir)

    def find_theorem(self, root_dir: str, name: str) -> str | None:
        return find_theorem(root_dir, name)

