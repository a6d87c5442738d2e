"""
Files Routes: 디렉터리 열기, 트리, 읽기/쓰기/생성.

- POST /api/files/open-directory → 새 디렉터리 열기 (last-opened 기록)
- GET  /api/files/tree           → 트리 새로고침 (기록 안 함)
- GET  /api/files/content        → 파일 읽기
- PUT  /api/files/content        → 파일 쓰기 + 정리 인덱스 갱신
- POST /api/files                → 빈 파일 생성
- POST /api/files/directories    → 디렉터리 생성
"""

from typing import Any

from fastapi import APIRouter, Request
from pydantic import BaseModel

from theorem_note.app.pickers import StaticDirectoryPicker
from theorem_note.app.workspace import Workspace
from theorem_note.core.file_tree import tree_to_dicts

api_router = APIRouter()


def get_workspace(request: Request) -> Workspace:
    """Request에서 Workspace 가져오기."""
    return request.app.state.workspace


class OpenDirectoryRequest(BaseModel):
    path: str = ""


class WriteFileRequest(BaseModel):
    path: str
    content: str
    root_dir: str = ""


class PathRequest(BaseModel):
    path: str


# =============================================================================
# API Routes
# =============================================================================

@api_router.post("/open-directory")
async def open_directory(request: Request, body: OpenDirectoryRequest) -> dict[str, Any]:
    """
    새 디렉터리 열기.

    빈 path는 선택 취소로 취급 (400, last-opened 변경 없음).
    """
    workspace = get_workspace(request)
    path, tree = workspace.open_new_directory(StaticDirectoryPicker(body.path))
    return {"path": path, "tree": tree_to_dicts(tree)}


@api_router.get("/tree")
async def get_tree(request: Request, path: str) -> list[dict[str, Any]]:
    """트리 새로고침."""
    return tree_to_dicts(get_workspace(request).get_file_tree(path))


@api_router.get("/content")
async def read_content(request: Request, path: str) -> dict[str, str]:
    """파일 읽기."""
    return {"path": path, "content": get_workspace(request).read_file(path)}


@api_router.put("/content")
async def write_content(request: Request, body: WriteFileRequest) -> dict[str, Any]:
    """
    파일 쓰기.

    theorems: 갱신된 정리 인덱스 (선언이 없거나 root_dir이 비면 null)
    """
    theorems = get_workspace(request).write_file(body.path, body.content, body.root_dir)
    return {"path": body.path, "theorems": theorems}


@api_router.post("", status_code=201)
async def create_file(request: Request, body: PathRequest) -> dict[str, str]:
    """빈 파일 생성 (이미 있으면 409)."""
    get_workspace(request).create_file(body.path)
    return {"path": body.path}


@api_router.post("/directories", status_code=201)
async def create_directory(request: Request, body: PathRequest) -> dict[str, str]:
    """디렉터리 생성 (이미 있으면 409)."""
    get_workspace(request).create_directory(body.path)
    return {"path": body.path}
