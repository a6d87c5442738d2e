"""
Pytest fixtures for the backend tests.

테스트 구성:
- 모든 파일 시스템 상태는 tmp_path 아래에서 생성
- 전역 설정 저장소는 tmp_path의 설정 디렉터리를 사용 (실제 사용자 설정 건드리지 않음)
"""

from collections.abc import Generator
from pathlib import Path

import pytest

from theorem_note.app.workspace import Workspace
from theorem_note.core import EventBus, GlobalConfigStore

# =============================================================================
# Path Fixtures
# =============================================================================

@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """빈 프로젝트 루트."""
    root = tmp_path / "project"
    root.mkdir()
    return root


@pytest.fixture
def sample_project(project_dir: Path) -> Path:
    """
    노트 디렉터리 샘플.

    project/
    ├── dir1/
    │   ├── dir2/
    │   │   └── file3.txt
    │   └── file2.txt
    └── file1.txt
    """
    (project_dir / "dir1" / "dir2").mkdir(parents=True)
    (project_dir / "file1.txt").write_text("file1", encoding="utf-8")
    (project_dir / "dir1" / "file2.txt").write_text("file2", encoding="utf-8")
    (project_dir / "dir1" / "dir2" / "file3.txt").write_text("file3", encoding="utf-8")
    return project_dir


@pytest.fixture
def config_dir(tmp_path: Path) -> Path:
    """전역 설정용 사용자 설정 디렉터리."""
    return tmp_path / "user-config"


# =============================================================================
# Store Fixtures
# =============================================================================

@pytest.fixture
def global_store(config_dir: Path) -> GlobalConfigStore:
    """tmp 디렉터리를 쓰는 전역 설정 저장소."""
    return GlobalConfigStore(config_dir=config_dir, lock_timeout=1.0)


@pytest.fixture
def events() -> EventBus:
    return EventBus()


@pytest.fixture
def workspace(global_store: GlobalConfigStore, events: EventBus) -> Workspace:
    """테스트용 Workspace."""
    return Workspace(global_store=global_store, events=events, lock_timeout=1.0)


# =============================================================================
# Config Fixtures
# =============================================================================

@pytest.fixture
def test_config(config_dir: Path) -> dict:
    """테스트용 앱 설정."""
    return {
        "paths": {"global_config_dir": str(config_dir)},
        "storage": {"lock_timeout": 1.0},
        "tree": {"max_depth": 64},
    }


@pytest.fixture
def client(test_config: dict) -> Generator:
    """FastAPI TestClient (tmp 설정으로 생성한 앱)."""
    from fastapi.testclient import TestClient

    from theorem_note.app.main import create_app

    with TestClient(create_app(test_config)) as client:
        yield client
