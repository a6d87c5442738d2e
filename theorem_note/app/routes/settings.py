"""
Settings Routes: 전역 설정, 프로젝트 폰트 설정, 세션.

- GET|PUT /api/settings/last-opened
- GET|PUT /api/settings/fonts?root_dir=
- GET|PUT /api/sessions?root_dir=
"""

from typing import Any

from fastapi import APIRouter, Request
from pydantic import BaseModel

from theorem_note.app.routes.files import get_workspace
from theorem_note.domain.constants import (
    DEFAULT_EDITOR_FONT_FAMILY,
    DEFAULT_EDITOR_FONT_SIZE,
    DEFAULT_PREVIEW_FONT_FAMILY,
    DEFAULT_PREVIEW_FONT_SIZE,
)
from theorem_note.domain.schemas import FontSettings

api_router = APIRouter()


class LastOpenedRequest(BaseModel):
    path: str


class FontSettingsRequest(BaseModel):
    editor_font_family: str = DEFAULT_EDITOR_FONT_FAMILY
    editor_font_size: int = DEFAULT_EDITOR_FONT_SIZE
    preview_font_family: str = DEFAULT_PREVIEW_FONT_FAMILY
    preview_font_size: int = DEFAULT_PREVIEW_FONT_SIZE


class SessionRequest(BaseModel):
    file_paths: list[str]


# =============================================================================
# Global Settings
# =============================================================================

@api_router.get("/settings/last-opened")
async def get_last_opened(request: Request) -> dict[str, str]:
    """마지막으로 연 디렉터리 (없으면 빈 문자열)."""
    return {"path": get_workspace(request).get_last_opened()}


@api_router.put("/settings/last-opened")
async def set_last_opened(request: Request, body: LastOpenedRequest) -> dict[str, str]:
    get_workspace(request).set_last_opened(body.path)
    return {"path": body.path}


# =============================================================================
# Project Font Settings
# =============================================================================

@api_router.get("/settings/fonts")
async def get_fonts(request: Request, root_dir: str = "") -> dict[str, Any]:
    """프로젝트 폰트 설정 (root_dir이 비거나 파일이 없으면 기본값)."""
    return get_workspace(request).get_font_settings(root_dir).to_dict()


@api_router.put("/settings/fonts")
async def save_fonts(
    request: Request,
    body: FontSettingsRequest,
    root_dir: str = "",
) -> dict[str, Any]:
    """폰트 설정만 교체 저장 (다른 설정 필드 보존)."""
    settings = FontSettings.from_dict(body.model_dump())
    return get_workspace(request).save_font_settings(root_dir, settings).to_dict()


# =============================================================================
# Session
# =============================================================================

@api_router.get("/sessions")
async def get_session(request: Request, root_dir: str = "") -> dict[str, list[str]]:
    return {"file_paths": get_workspace(request).load_session(root_dir)}


@api_router.put("/sessions")
async def put_session(
    request: Request,
    body: SessionRequest,
    root_dir: str = "",
) -> dict[str, list[str]]:
    """세션 통째로 교체 (순서 유지)."""
    get_workspace(request).save_session(root_dir, body.file_paths)
    return {"file_paths": body.file_paths}
