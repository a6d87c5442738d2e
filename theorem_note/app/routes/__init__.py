"""
FastAPI Routes.

JSON API 라우트 (표시 계층 전용)
"""

from . import events, files, settings, theorems

__all__ = ["events", "files", "settings", "theorems"]
