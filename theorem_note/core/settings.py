"""
Path Store: 전역 설정(마지막으로 연 경로) + 프로젝트 설정(폰트).

두 저장소 모두 관대한 정책:
- 파일 없음 → 기본값
- 파싱 실패 → 기본값 (warning 로그, 에러 없음)
잃어도 비용이 낮은 표시용 설정이므로 세션/정리 인덱스와 정책이 다름.
"""

import logging
import os
import sys
import threading
from pathlib import Path

from theorem_note.core.paths import ensure_storage_dir, project_file_path
from theorem_note.core.storage import atomic_write_json, load_json, store_lock
from theorem_note.domain.constants import (
    DEFAULT_LOCK_TIMEOUT,
    GLOBAL_CONFIG_DIR_NAME,
    GLOBAL_CONFIG_FILENAME,
    PROJECT_CONFIG_FILENAME,
)
from theorem_note.domain.errors import ErrorCodes, FileSystemError, from_os_error
from theorem_note.domain.schemas import FontSettings, GlobalConfig, ProjectConfig

logger = logging.getLogger(__name__)

# =============================================================================
# Global Settings
# =============================================================================


def user_config_dir() -> Path:
    """
    OS별 사용자 설정 디렉터리.

    - Windows: %APPDATA%
    - macOS: ~/Library/Application Support
    - 그 외: $XDG_CONFIG_HOME 또는 ~/.config

    Raises:
        FileSystemError: 경로를 결정할 수 없음
    """
    if sys.platform == "win32":
        appdata = os.environ.get("APPDATA")
        if not appdata:
            raise FileSystemError(
                ErrorCodes.FILESYSTEM_ERROR, "%APPDATA% is not defined"
            )
        return Path(appdata)

    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg and os.path.isabs(xdg):
        return Path(xdg)
    return Path.home() / ".config"


class GlobalConfigStore:
    """
    전역 설정 저장소.

    애플리케이션 시작 시 한 번 생성하여 호출자들에게 전달.
    set은 즉시 디스크에 반영 (write-through).

    구조:
    <config_dir>/theorem-note-wails/global_config.json
    """

    def __init__(
        self,
        config_dir: str | Path | None = None,
        lock_timeout: float = DEFAULT_LOCK_TIMEOUT,
    ):
        """
        Args:
            config_dir: 사용자 설정 디렉터리 (None이면 OS 기본값)
            lock_timeout: 설정 파일 락 대기 시간
        """
        base_dir = Path(config_dir) if config_dir else user_config_dir()
        self.path = base_dir / GLOBAL_CONFIG_DIR_NAME / GLOBAL_CONFIG_FILENAME
        self.lock_timeout = lock_timeout
        self._mutex = threading.Lock()
        self._config = self._load()

    def _load(self) -> GlobalConfig:
        if not self.path.exists():
            config = GlobalConfig()
            self._save(config)
            logger.info(f"Initialized global config at {self.path}")
            return config

        try:
            data = load_json(self.path)
            if not isinstance(data, dict):
                raise ValueError("global config must be a JSON object")
            return GlobalConfig.from_dict(data)
        except ValueError as e:
            logger.warning(f"Global config {self.path} is unreadable, using defaults: {e}")
            return GlobalConfig()

    def _save(self, config: GlobalConfig) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise from_os_error(e, self.path.parent) from e
        with store_lock(self.path, timeout=self.lock_timeout):
            atomic_write_json(self.path, config.to_dict())

    def get_last_opened(self) -> str:
        """마지막으로 연 디렉터리 (설정된 적 없으면 빈 문자열)."""
        with self._mutex:
            return self._config.last_opened_path

    def set_last_opened(self, path: str) -> None:
        """마지막으로 연 디렉터리 저장 (즉시 영속화)."""
        with self._mutex:
            config = GlobalConfig(last_opened_path=str(path))
            self._save(config)
            self._config = config
        logger.info(f"Last opened path set to {path}")


# =============================================================================
# Project Settings
# =============================================================================


def get_project_config_path(root_dir: str | Path) -> Path:
    """<root_dir>/.theorem-note/config.json (빈 root면 InvalidArgumentError)."""
    return project_file_path(root_dir, PROJECT_CONFIG_FILENAME)


def get_default_project_config() -> ProjectConfig:
    """기본 프로젝트 설정."""
    return ProjectConfig(font_settings=FontSettings())


def load_project_config(root_dir: str | Path) -> ProjectConfig:
    """
    프로젝트 설정 로드 (관대한 정책).

    Returns:
        저장된 설정. 빈 root, 파일 없음, 파싱 실패 시 기본값.
    """
    if not str(root_dir):
        return get_default_project_config()

    config_path = get_project_config_path(root_dir)
    try:
        data = load_json(config_path)
        if data is None:
            return get_default_project_config()
        if not isinstance(data, dict):
            raise ValueError("project config must be a JSON object")
        return ProjectConfig.from_dict(data)
    except (ValueError, TypeError) as e:
        logger.warning(f"Project config {config_path} is unreadable, using defaults: {e}")
        return get_default_project_config()


def save_project_config(
    root_dir: str | Path,
    config: ProjectConfig,
    lock_timeout: float = DEFAULT_LOCK_TIMEOUT,
) -> Path:
    """
    프로젝트 설정 저장 (덮어쓰기).

    Raises:
        InvalidArgumentError: EMPTY_ROOT_DIR
    """
    ensure_storage_dir(root_dir)
    config_path = get_project_config_path(root_dir)
    with store_lock(config_path, timeout=lock_timeout):
        atomic_write_json(config_path, config.to_dict())
    return config_path


def get_font_settings(root_dir: str | Path) -> FontSettings:
    """프로젝트 폰트 설정 (없으면 기본값)."""
    return load_project_config(root_dir).font_settings


def save_font_settings(
    root_dir: str | Path,
    settings: FontSettings,
    lock_timeout: float = DEFAULT_LOCK_TIMEOUT,
) -> ProjectConfig:
    """
    폰트 설정만 교체하여 저장 (load → merge → save).

    다른 설정 필드는 디스크에 있던 값 그대로 보존.

    Returns:
        저장된 전체 프로젝트 설정

    Raises:
        InvalidArgumentError: EMPTY_ROOT_DIR
    """
    ensure_storage_dir(root_dir)
    config_path = get_project_config_path(root_dir)
    with store_lock(config_path, timeout=lock_timeout):
        config = load_project_config(root_dir)
        config.font_settings = settings
        atomic_write_json(config_path, config.to_dict())
    return config
