"""
Directory picker: 디렉터리 선택 협력자.

취소는 실패와 구분된 DirectoryPickCancelledError.
GUI 대화상자는 표시 계층 소관이며, HTTP API는 요청에 담긴
경로를 StaticDirectoryPicker로 감싸서 사용.
"""

from typing import Protocol

from theorem_note.domain.errors import DirectoryPickCancelledError, ErrorCodes


class DirectoryPicker(Protocol):
    """디렉터리 선택기 인터페이스."""

    def pick(self, title: str) -> str:
        """
        디렉터리 선택.

        Args:
            title: 대화상자 제목

        Returns:
            선택된 절대 경로

        Raises:
            DirectoryPickCancelledError: 사용자가 취소함
        """
        ...


class StaticDirectoryPicker:
    """미리 정해진 경로를 반환하는 선택기. 빈 경로는 취소로 취급."""

    def __init__(self, path: str):
        self.path = path

    def pick(self, title: str) -> str:
        if not self.path:
            raise DirectoryPickCancelledError(
                ErrorCodes.DIRECTORY_PICK_CANCELLED,
                "no directory selected",
                title=title,
            )
        return self.path
