"""
test_file_tree.py - 파일 트리 스캔 테스트

검증:
- 디렉터리 우선 → 이름순 (각 레벨 독립)
- 목록 실패는 분류된 에러로 전파
- 심볼릭 링크 순환/깊이 제한 시 종료
"""

import json
import logging
import os
import sys
from pathlib import Path

import pytest

from theorem_note.core.file_tree import build_file_tree, sort_nodes, tree_to_dicts
from theorem_note.domain.errors import NotFoundError, PermissionDeniedError
from theorem_note.domain.schemas import FileNode

# =============================================================================
# 정렬 규칙
# =============================================================================


class TestSortNodes:
    """sort_nodes 정렬 규칙 테스트."""

    def test_directories_before_files(self):
        """디렉터리가 이름과 무관하게 파일보다 먼저."""
        nodes = [
            FileNode(name="a.txt", path="/r/a.txt", is_directory=False),
            FileNode(name="z", path="/r/z", is_directory=True),
        ]

        result = sort_nodes(nodes)

        assert [n.name for n in result] == ["z", "a.txt"]

    def test_case_sensitive_order(self):
        """대문자가 소문자보다 먼저 (code point 순)."""
        nodes = [
            FileNode(name="b.md", path="/r/b.md", is_directory=False),
            FileNode(name="B.md", path="/r/B.md", is_directory=False),
            FileNode(name="a.md", path="/r/a.md", is_directory=False),
        ]

        result = sort_nodes(nodes)

        assert [n.name for n in result] == ["B.md", "a.md", "b.md"]

    def test_input_order_does_not_matter(self):
        """입력 순서와 무관하게 같은 결과."""
        nodes = [
            FileNode(name="file1.txt", path="/r/file1.txt", is_directory=False),
            FileNode(name="dir1", path="/r/dir1", is_directory=True),
        ]

        assert sort_nodes(nodes) == sort_nodes(list(reversed(nodes)))


# =============================================================================
# build_file_tree
# =============================================================================


class TestBuildFileTree:
    """build_file_tree 테스트."""

    def test_nested_structure(self, sample_project: Path):
        """중첩 구조가 기대한 트리로 변환됨."""
        root = sample_project

        items = build_file_tree(str(root))

        expected = [
            FileNode(
                name="dir1",
                path=str(root / "dir1"),
                is_directory=True,
                children=(
                    FileNode(
                        name="dir2",
                        path=str(root / "dir1" / "dir2"),
                        is_directory=True,
                        children=(
                            FileNode(
                                name="file3.txt",
                                path=str(root / "dir1" / "dir2" / "file3.txt"),
                                is_directory=False,
                            ),
                        ),
                    ),
                    FileNode(
                        name="file2.txt",
                        path=str(root / "dir1" / "file2.txt"),
                        is_directory=False,
                    ),
                ),
            ),
            FileNode(
                name="file1.txt",
                path=str(root / "file1.txt"),
                is_directory=False,
            ),
        ]
        assert items == expected

    def test_top_level_count_matches_entries(self, project_dir: Path):
        """N개 항목 → 최상위 노드 N개."""
        for name in ["c.txt", "a", "B", "b.txt", "A.txt"]:
            if "." in name:
                (project_dir / name).write_text("")
            else:
                (project_dir / name).mkdir()

        items = build_file_tree(project_dir)

        assert len(items) == 5
        assert [n.name for n in items] == ["B", "a", "A.txt", "b.txt", "c.txt"]

    def test_empty_directory(self, project_dir: Path):
        """빈 디렉터리 → 빈 리스트."""
        assert build_file_tree(project_dir) == []

    def test_files_have_no_children(self, sample_project: Path):
        """파일 노드의 children은 비어 있음."""
        items = build_file_tree(sample_project)

        file_node = items[-1]
        assert not file_node.is_directory
        assert file_node.children == ()

    def test_repeated_calls_are_stable(self, sample_project: Path):
        """변경 없는 입력에 대해 반복 호출 결과 동일."""
        assert build_file_tree(sample_project) == build_file_tree(sample_project)

    def test_hidden_storage_dir_is_listed(self, project_dir: Path):
        """.theorem-note 디렉터리도 일반 디렉터리로 포함됨."""
        (project_dir / ".theorem-note").mkdir()
        (project_dir / "note.md").write_text("")

        items = build_file_tree(project_dir)

        assert [n.name for n in items] == [".theorem-note", "note.md"]

    def test_missing_directory_raises_not_found(self, tmp_path: Path):
        """존재하지 않는 디렉터리 → NotFoundError."""
        with pytest.raises(NotFoundError) as exc_info:
            build_file_tree(tmp_path / "missing")

        assert "missing" in exc_info.value.context["path"]

    def test_path_to_file_raises_not_found(self, tmp_path: Path):
        """파일 경로로 호출 → NotFoundError (NotADirectory)."""
        target = tmp_path / "file.txt"
        target.write_text("x")

        with pytest.raises(NotFoundError):
            build_file_tree(target)

    @pytest.mark.skipif(
        sys.platform == "win32" or (hasattr(os, "geteuid") and os.geteuid() == 0),
        reason="permission bits not enforced",
    )
    def test_unreadable_subdirectory_fails_whole_tree(self, sample_project: Path):
        """하위 디렉터리 목록 실패 → 부분 트리 없이 에러."""
        locked = sample_project / "dir1" / "dir2"
        locked.chmod(0o000)
        try:
            with pytest.raises(PermissionDeniedError):
                build_file_tree(sample_project)
        finally:
            locked.chmod(0o755)


# =============================================================================
# 심볼릭 링크 / 깊이 제한
# =============================================================================


@pytest.mark.skipif(sys.platform == "win32", reason="symlinks need privileges on Windows")
class TestSymlinks:
    """심볼릭 링크 처리 테스트."""

    def test_symlink_loop_terminates(self, project_dir: Path):
        """조상을 가리키는 링크는 따라가지 않음."""
        sub = project_dir / "sub"
        sub.mkdir()
        (sub / "loop").symlink_to(project_dir, target_is_directory=True)

        items = build_file_tree(project_dir)

        assert [n.name for n in items] == ["sub"]
        loop = items[0].children[0]
        assert loop.name == "loop"
        assert loop.is_directory
        assert loop.children == ()

    def test_symlink_to_sibling_is_followed(self, project_dir: Path):
        """순환이 아닌 디렉터리 링크는 내용까지 스캔."""
        real = project_dir / "real"
        real.mkdir()
        (real / "note.md").write_text("")
        (project_dir / "alias").symlink_to(real, target_is_directory=True)

        items = build_file_tree(project_dir)

        alias = items[0]
        assert alias.name == "alias"
        assert [c.name for c in alias.children] == ["note.md"]
        assert alias.children[0].path == str(project_dir / "alias" / "note.md")

    def test_broken_symlink_is_file_node(self, project_dir: Path):
        """깨진 링크는 파일 노드."""
        (project_dir / "dangling").symlink_to(project_dir / "nowhere")

        items = build_file_tree(project_dir)

        assert items == [
            FileNode(name="dangling", path=str(project_dir / "dangling"), is_directory=False)
        ]


class TestMaxDepth:
    """max_depth 제한 테스트."""

    def test_depth_limit_stops_descent(self, sample_project: Path):
        """제한을 넘는 디렉터리는 children 없이 반환."""
        items = build_file_tree(sample_project, max_depth=1)

        dir1 = items[0]
        dir2 = dir1.children[0]
        assert dir2.name == "dir2"
        assert dir2.children == ()

    def test_no_limit(self, sample_project: Path):
        """None이면 끝까지 스캔."""
        items = build_file_tree(sample_project, max_depth=None)

        assert items[0].children[0].children[0].name == "file3.txt"


@pytest.mark.skipif(sys.platform != "linux", reason="needs a filesystem that stores raw bytes")
class TestUndecodableNames:
    """UTF-8이 아닌 파일 이름 테스트."""

    def test_undecodable_name_is_skipped(
        self, project_dir: Path, caplog: pytest.LogCaptureFixture
    ):
        """이름을 UTF-8로 표현할 수 없는 항목은 건너뛰고 나머지는 반환."""
        with open(os.fsencode(project_dir) + b"/bad\xff.md", "wb"):
            pass
        (project_dir / "good.md").write_text("ok", encoding="utf-8")

        with caplog.at_level(logging.WARNING):
            items = build_file_tree(project_dir)

        assert [n.name for n in items] == ["good.md"]
        assert "undecodable name" in caplog.text

    def test_tree_is_json_serializable(self, project_dir: Path):
        (project_dir / "sub").mkdir()
        with open(os.fsencode(project_dir) + b"/sub/bad\xfe", "wb"):
            pass

        items = build_file_tree(project_dir)

        json.dumps(tree_to_dicts(items))
        assert items[0].children == ()


# =============================================================================
# 직렬화
# =============================================================================


class TestTreeSerialization:
    """tree_to_dicts 테스트."""

    def test_to_dicts_nested(self, sample_project: Path):
        """디렉터리 children도 dict 리스트로 변환."""
        data = tree_to_dicts(build_file_tree(sample_project))

        assert data[0]["name"] == "dir1"
        assert data[0]["is_directory"] is True
        assert [c["name"] for c in data[0]["children"]] == ["dir2", "file2.txt"]
        assert data[0]["children"][0]["children"][0]["path"] == str(
            sample_project / "dir1" / "dir2" / "file3.txt"
        )

    def test_file_children_serialized_as_empty_list(self):
        """파일 노드 children → []."""
        node = FileNode(name="a.md", path="/r/a.md", is_directory=False)

        assert node.to_dict() == {
            "name": "a.md",
            "path": "/r/a.md",
            "is_directory": False,
            "children": [],
        }
