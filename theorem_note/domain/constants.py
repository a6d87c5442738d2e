"""
Domain Constants: 백엔드 전역 상수.

저장 경로 정책, 기본 폰트, 태그 패턴 등 시스템 전반에서 사용되는 값들.
"""

import re

# =============================================================================
# Project Storage (프로젝트별 저장소)
# =============================================================================
# <project_root>/
# └── .theorem-note/
#     ├── config.json     # 프로젝트 설정 (폰트)
#     ├── session.json    # 열린 탭 목록
#     └── theorems.json   # 정리 이름 → 파일 경로 인덱스

STORAGE_DIR_NAME = ".theorem-note"
PROJECT_CONFIG_FILENAME = "config.json"
SESSION_FILENAME = "session.json"
THEOREMS_FILENAME = "theorems.json"

# =============================================================================
# Global Storage (전역 설정)
# =============================================================================
# <user config dir>/theorem-note-wails/global_config.json (기존 데스크톱 앱과 같은 위치)

GLOBAL_CONFIG_DIR_NAME = "theorem-note-wails"
GLOBAL_CONFIG_FILENAME = "global_config.json"

# 파일 락 suffix: <store file>.lock
LOCK_SUFFIX = ".lock"
DEFAULT_LOCK_TIMEOUT = 10.0

# =============================================================================
# Font Defaults
# =============================================================================

DEFAULT_EDITOR_FONT_FAMILY = "Consolas, Monaco, 'Courier New', monospace"
DEFAULT_EDITOR_FONT_SIZE = 14
DEFAULT_PREVIEW_FONT_FAMILY = (
    "-apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, Helvetica, Arial, sans-serif"
)
DEFAULT_PREVIEW_FONT_SIZE = 14

# =============================================================================
# Theorem Markup
# =============================================================================
# 여는 태그만 매칭: <theorem name="NAME">

THEOREM_TAG_PATTERN = re.compile(r'<theorem name="([^"]+)">')

# =============================================================================
# File Tree
# =============================================================================

DEFAULT_TREE_MAX_DEPTH = 64

# =============================================================================
# Events
# =============================================================================

EVENT_FONT_SETTINGS_UPDATED = "font-settings-updated"

DIRECTORY_PICKER_TITLE = "Select Directory"
