"""
Data schemas for the backend.

규칙:
- JSON 키는 snake_case (디스크 포맷과 동일)
- from_dict는 누락 필드를 기본값으로 채움
- FileNode는 요청마다 새로 생성, 생성 후 수정 금지
"""

from dataclasses import dataclass, field
from typing import Any

from theorem_note.domain.constants import (
    DEFAULT_EDITOR_FONT_FAMILY,
    DEFAULT_EDITOR_FONT_SIZE,
    DEFAULT_PREVIEW_FONT_FAMILY,
    DEFAULT_PREVIEW_FONT_SIZE,
)

# =============================================================================
# File Tree
# =============================================================================

@dataclass(frozen=True)
class FileNode:
    """파일 트리 노드. 파일이면 children은 빈 tuple."""
    name: str
    path: str
    is_directory: bool
    children: tuple["FileNode", ...] = ()

    def to_dict(self) -> dict[str, Any]:
        """JSON 직렬화용."""
        return {
            "name": self.name,
            "path": self.path,
            "is_directory": self.is_directory,
            "children": [child.to_dict() for child in self.children],
        }


# =============================================================================
# Settings
# =============================================================================

@dataclass
class FontSettings:
    """에디터/프리뷰 폰트 설정."""
    editor_font_family: str = DEFAULT_EDITOR_FONT_FAMILY
    editor_font_size: int = DEFAULT_EDITOR_FONT_SIZE
    preview_font_family: str = DEFAULT_PREVIEW_FONT_FAMILY
    preview_font_size: int = DEFAULT_PREVIEW_FONT_SIZE

    def to_dict(self) -> dict[str, Any]:
        return {
            "editor_font_family": self.editor_font_family,
            "editor_font_size": self.editor_font_size,
            "preview_font_family": self.preview_font_family,
            "preview_font_size": self.preview_font_size,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FontSettings":
        defaults = cls()
        return cls(
            editor_font_family=data.get("editor_font_family", defaults.editor_font_family),
            editor_font_size=int(data.get("editor_font_size", defaults.editor_font_size)),
            preview_font_family=data.get("preview_font_family", defaults.preview_font_family),
            preview_font_size=int(data.get("preview_font_size", defaults.preview_font_size)),
        )


@dataclass
class ProjectConfig:
    """
    프로젝트별 설정 (.theorem-note/config.json).

    extra: 알 수 없는 상위 키. 저장 시 그대로 보존하여
    이후 추가될 설정 필드를 덮어쓰지 않음.
    """
    font_settings: FontSettings = field(default_factory=FontSettings)
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            **self.extra,
            "font_settings": self.font_settings.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ProjectConfig":
        font_data = data.get("font_settings") or {}
        if not isinstance(font_data, dict):
            raise ValueError("font_settings must be an object")
        extra = {k: v for k, v in data.items() if k != "font_settings"}
        return cls(font_settings=FontSettings.from_dict(font_data), extra=extra)


@dataclass
class GlobalConfig:
    """애플리케이션 전역 설정 (프로젝트와 무관)."""
    last_opened_path: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"last_opened_path": self.last_opened_path}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GlobalConfig":
        value = data.get("last_opened_path", "")
        if not isinstance(value, str):
            raise ValueError("last_opened_path must be a string")
        return cls(last_opened_path=value)
