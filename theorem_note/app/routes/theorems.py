"""
Theorems Routes: 정리 상호 참조 조회.

- GET /api/theorems?root_dir=          → 전체 인덱스
- GET /api/theorems/{name}?root_dir=   → 선언 파일 경로
"""

from fastapi import APIRouter, HTTPException, Request

from theorem_note.app.routes.files import get_workspace

api_router = APIRouter()


@api_router.get("")
async def list_theorems(request: Request, root_dir: str = "") -> dict[str, str]:
    """이름 → 경로 (키 정렬)."""
    index = get_workspace(request).list_theorems(root_dir)
    return dict(sorted(index.items()))


@api_router.get("/{name}")
async def get_theorem(request: Request, name: str, root_dir: str = "") -> dict[str, str]:
    path = get_workspace(request).find_theorem(root_dir, name)
    if path is None:
        raise HTTPException(
            status_code=404,
            detail={"code": "THEOREM_NOT_FOUND", "name": name},
        )
    return {"name": name, "path": path}
