"""
Error definitions for the backend.

정책:
- 조용한 실패 금지 → 코드가 붙은 TheoremNoteError로 명시적 실패
- OSError는 from_os_error()로 분류 후 전달 (원인 체인 유지)
- 설정 저장소(전역/프로젝트)만 관대한 정책: 손상 시 기본값
- 세션/정리 인덱스는 엄격한 정책: 손상 시 DataCorruptionError
"""

import errno
from typing import Any


class TheoremNoteError(Exception):
    """
    백엔드 공통 에러.

    Usage:
        raise NotFoundError(ErrorCodes.FILE_NOT_FOUND, "file does not exist", path=p)
    """

    def __init__(self, code: str, message: str = "", **context: Any) -> None:
        self.code = code
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        ctx_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
        head = f"[{self.code}] {self.message}".rstrip()
        return f"{head} ({ctx_str})" if ctx_str else head

    def to_dict(self) -> dict[str, Any]:
        """로그/JSON 직렬화용."""
        return {
            "code": self.code,
            "message": self.message,
            **{k: str(v) for k, v in self.context.items()},
        }


class NotFoundError(TheoremNoteError):
    """읽기/목록 대상 파일 또는 디렉터리 없음."""


class AlreadyExistsError(TheoremNoteError):
    """생성 대상 경로가 이미 점유됨."""


class InvalidArgumentError(TheoremNoteError):
    """필수 인자 누락 (빈 project root 등)."""


class PermissionDeniedError(TheoremNoteError):
    """OS 수준 접근 거부."""


class DataCorruptionError(TheoremNoteError):
    """저장된 JSON이 존재하지만 해석 불가 (엄격한 저장소 전용)."""


class FileSystemError(TheoremNoteError):
    """그 밖의 OS 수준 실패."""


class DirectoryPickCancelledError(TheoremNoteError):
    """디렉터리 선택 취소. 실패와 구분되며 last-opened를 기록하지 않음."""


# =============================================================================
# Error Codes
# =============================================================================

class ErrorCodes:
    """에러 코드 상수."""

    # === File System ===
    FILE_NOT_FOUND = "FILE_NOT_FOUND"
    FILE_EXISTS = "FILE_EXISTS"
    PERMISSION_DENIED = "PERMISSION_DENIED"
    FILESYSTEM_ERROR = "FILESYSTEM_ERROR"

    # === Arguments ===
    EMPTY_ROOT_DIR = "EMPTY_ROOT_DIR"

    # === Stores ===
    SESSION_CORRUPT = "SESSION_CORRUPT"
    THEOREM_INDEX_CORRUPT = "THEOREM_INDEX_CORRUPT"
    STORE_LOCK_TIMEOUT = "STORE_LOCK_TIMEOUT"

    # === Directory Picker ===
    DIRECTORY_PICK_CANCELLED = "DIRECTORY_PICK_CANCELLED"


def from_os_error(exc: OSError, path: Any) -> TheoremNoteError:
    """
    OSError를 에러 분류 체계로 변환.

    Args:
        exc: 원본 OSError
        path: 실패한 경로

    Returns:
        대응하는 TheoremNoteError 하위 인스턴스 (raise는 호출자가 `from exc`로)
    """
    if isinstance(exc, (FileNotFoundError, NotADirectoryError)) or exc.errno == errno.ENOENT:
        return NotFoundError(ErrorCodes.FILE_NOT_FOUND, exc.strerror or str(exc), path=str(path))
    if isinstance(exc, FileExistsError):
        return AlreadyExistsError(ErrorCodes.FILE_EXISTS, exc.strerror or str(exc), path=str(path))
    if isinstance(exc, PermissionError):
        return PermissionDeniedError(
            ErrorCodes.PERMISSION_DENIED, exc.strerror or str(exc), path=str(path)
        )
    return FileSystemError(ErrorCodes.FILESYSTEM_ERROR, exc.strerror or str(exc), path=str(path))
