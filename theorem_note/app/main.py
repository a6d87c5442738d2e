"""
FastAPI 애플리케이션 진입점.

데스크톱 셸(표시 계층)이 로컬에서 호출하는 JSON API.

실행:
- 개발: uv run uvicorn theorem_note.app.main:app --reload
- 프로덕션: uv run uvicorn theorem_note.app.main:app
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

import yaml
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from theorem_note.app.routes import events, files, settings, theorems
from theorem_note.app.workspace import Workspace
from theorem_note.core import EventBus, GlobalConfigStore
from theorem_note.domain.constants import DEFAULT_LOCK_TIMEOUT, DEFAULT_TREE_MAX_DEPTH
from theorem_note.domain.errors import (
    AlreadyExistsError,
    DataCorruptionError,
    DirectoryPickCancelledError,
    InvalidArgumentError,
    NotFoundError,
    PermissionDeniedError,
    TheoremNoteError,
)

logger = logging.getLogger(__name__)

# =============================================================================
# Configuration
# =============================================================================


def load_config(config_path: Path | None = None) -> dict:
    """설정 파일 로드."""
    if config_path is None:
        # 프로젝트 루트의 default.yaml
        config_path = Path(__file__).parent.parent.parent / "default.yaml"

    if not config_path.exists():
        return {}

    with open(config_path, encoding="utf-8") as f:
        data: dict[Any, Any] = yaml.safe_load(f) or {}
        return data


def build_workspace(config: dict) -> Workspace:
    """
    설정으로 Workspace 구성.

    설정 키:
    - paths.global_config_dir: 전역 설정 위치 (빈 값이면 OS 기본)
    - storage.lock_timeout: 저장소 락 대기 시간 (초)
    - tree.max_depth: 트리 재귀 깊이 제한 (null이면 제한 없음)
    """
    paths = config.get("paths") or {}
    storage = config.get("storage") or {}
    tree = config.get("tree") or {}

    lock_timeout = float(storage.get("lock_timeout", DEFAULT_LOCK_TIMEOUT))
    global_store = GlobalConfigStore(
        config_dir=paths.get("global_config_dir") or None,
        lock_timeout=lock_timeout,
    )
    return Workspace(
        global_store=global_store,
        events=EventBus(),
        tree_max_depth=tree.get("max_depth", DEFAULT_TREE_MAX_DEPTH),
        lock_timeout=lock_timeout,
    )


# =============================================================================
# Error Mapping
# =============================================================================

STATUS_BY_ERROR: list[tuple[type[TheoremNoteError], int]] = [
    (NotFoundError, 404),
    (AlreadyExistsError, 409),
    (InvalidArgumentError, 400),
    (DirectoryPickCancelledError, 400),
    (PermissionDeniedError, 403),
    (DataCorruptionError, 500),
]


def status_for(error: TheoremNoteError) -> int:
    """에러 분류 → HTTP 상태 코드 (나머지는 500)."""
    for error_type, status in STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return status
    return 500


async def handle_theorem_note_error(request: Request, exc: TheoremNoteError) -> JSONResponse:
    status = status_for(exc)
    if status >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
    return JSONResponse(status_code=status, content={"detail": exc.to_dict()})


# =============================================================================
# App Factory
# =============================================================================


def create_app(config: dict | None = None) -> FastAPI:
    """
    FastAPI 앱 생성.

    Args:
        config: 설정 dict (None이면 시작 시 default.yaml 로드)
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """
        시작 시: 설정 로드, 전역 설정 저장소/Workspace 생성 (한 번)
        """
        app.state.config = config if config is not None else load_config()
        app.state.workspace = build_workspace(app.state.config)
        yield

    app = FastAPI(
        title="Theorem Note Backend",
        description="노트 디렉터리 탐색, 파일 편집, 정리 인덱스",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.add_exception_handler(TheoremNoteError, handle_theorem_note_error)

    app.include_router(files.api_router, prefix="/api/files", tags=["Files API"])
    app.include_router(settings.api_router, prefix="/api", tags=["Settings API"])
    app.include_router(theorems.api_router, prefix="/api/theorems", tags=["Theorems API"])
    app.include_router(events.api_router, prefix="/api/events", tags=["Events API"])

    @app.get("/health")
    async def health() -> dict[str, str]:
        """헬스 체크."""
        return {"status": "ok"}

    return app


app = create_app()


# =============================================================================
# CLI Entry Point
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    config = load_config()
    logging.basicConfig(
        level=(config.get("logging") or {}).get("level", "INFO"),
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    server = config.get("server") or {}
    uvicorn.run(
        "theorem_note.app.main:app",
        host=server.get("host", "127.0.0.1"),
        port=int(server.get("port", 8000)),
    )
