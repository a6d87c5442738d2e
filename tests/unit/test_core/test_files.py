"""
test_files.py - 파일 읽기/쓰기/생성 테스트

검증:
- write_file: 내용 쓰기 후 정리 인덱스 갱신, 빈 root면 인덱싱 생략
- 인덱스 실패 시에도 내용 쓰기는 유지 (비원자 경계)
- create_*: 이미 있으면 AlreadyExistsError, 기존 내용 보존
"""

import json
from pathlib import Path

import pytest

from theorem_note.core.files import create_directory, create_file, read_file, write_file
from theorem_note.domain.errors import (
    AlreadyExistsError,
    DataCorruptionError,
    NotFoundError,
)


class TestReadFile:
    """read_file 테스트."""

    def test_reads_content(self, tmp_path: Path):
        target = tmp_path / "test.txt"
        target.write_text("Hello, World!", encoding="utf-8")

        assert read_file(target) == "Hello, World!"

    def test_preserves_line_endings(self, tmp_path: Path):
        target = tmp_path / "crlf.txt"
        target.write_bytes(b"a\r\nb\n")

        assert read_file(target) == "a\r\nb\n"

    def test_missing_file_raises_not_found(self, tmp_path: Path):
        with pytest.raises(NotFoundError):
            read_file(tmp_path / "missing.txt")


class TestWriteFile:
    """write_file 테스트."""

    def test_writes_content(self, tmp_path: Path):
        target = tmp_path / "test.txt"

        result = write_file(target, "This is a test content.")

        assert target.read_text(encoding="utf-8") == "This is a test content."
        assert result is None

    def test_without_theorems_no_index(self, project_dir: Path):
        """선언 없음 → 인덱스 파일 생성 안 함."""
        target = project_dir / "note.md"

        write_file(target, "plain note", project_dir)

        assert not (project_dir / ".theorem-note" / "theorems.json").exists()

    def test_with_theorem_tag_updates_index(self, project_dir: Path):
        target = project_dir / "test.md"
        content = (
            "This is a test file with a theorem.\n"
            '<theorem name="Test Theorem">Some theorem content.</theorem>'
        )

        result = write_file(target, content, project_dir)

        index_path = project_dir / ".theorem-note" / "theorems.json"
        assert json.loads(index_path.read_text(encoding="utf-8")) == {"Test Theorem": str(target)}
        assert result == {"Test Theorem": str(target)}

    def test_empty_root_disables_indexing(self, tmp_path: Path):
        """빈 root → 선언이 있어도 에러 없이 인덱싱 생략."""
        target = tmp_path / "test.md"

        result = write_file(target, '<theorem name="T">x</theorem>', "")

        assert result is None
        assert not (tmp_path / ".theorem-note").exists()
        assert target.read_text(encoding="utf-8") == '<theorem name="T">x</theorem>'

    def test_rewrite_drops_removed_theorem(self, project_dir: Path):
        a = project_dir / "a.md"
        b = project_dir / "b.md"
        write_file(a, '<theorem name="T">', project_dir)
        write_file(b, '<theorem name="U">', project_dir)

        write_file(a, '<theorem name="V">', project_dir)

        index = json.loads((project_dir / ".theorem-note" / "theorems.json").read_text())
        assert index == {"U": str(b), "V": str(a)}

    def test_index_failure_keeps_content(self, project_dir: Path):
        """인덱스 손상 → 에러, 하지만 내용은 이미 기록됨."""
        storage = project_dir / ".theorem-note"
        storage.mkdir()
        (storage / "theorems.json").write_text("{corrupt")
        target = project_dir / "note.md"

        with pytest.raises(DataCorruptionError):
            write_file(target, '<theorem name="T">', project_dir)

        assert target.read_text(encoding="utf-8") == '<theorem name="T">'

    def test_missing_parent_raises_not_found(self, tmp_path: Path):
        with pytest.raises(NotFoundError):
            write_file(tmp_path / "missing" / "note.md", "x")


class TestCreateFile:
    """create_file 테스트."""

    def test_creates_empty_file(self, tmp_path: Path):
        target = tmp_path / "new.txt"

        create_file(target)

        assert target.is_file()
        assert target.read_text() == ""

    def test_existing_file_raises_and_keeps_content(self, tmp_path: Path):
        target = tmp_path / "new.txt"
        target.write_text("keep me")

        with pytest.raises(AlreadyExistsError):
            create_file(target)

        assert target.read_text() == "keep me"

    def test_existing_directory_raises(self, tmp_path: Path):
        (tmp_path / "dir").mkdir()

        with pytest.raises(AlreadyExistsError):
            create_file(tmp_path / "dir")


class TestCreateDirectory:
    """create_directory 테스트."""

    def test_creates_directory(self, tmp_path: Path):
        target = tmp_path / "newdir"

        create_directory(target)

        assert target.is_dir()

    def test_existing_raises(self, tmp_path: Path):
        target = tmp_path / "newdir"
        target.mkdir()

        with pytest.raises(AlreadyExistsError):
            create_directory(target)

    def test_missing_parent_raises(self, tmp_path: Path):
        with pytest.raises(NotFoundError):
            create_directory(tmp_path / "a" / "b")
