"""Unit tests for the FsTree class."""

import os
from pathlib import Path

import pytest

from fstree.exclusion_rules.git_rules import GitIgnoreExclusionRules
from fstree.fs_tree.build_issue import IssueKind
from fstree.fs_tree.fs_tree import FsTree
from fstree.fs_tree.permission_action import PermissionAction
from fstree.types import NodeKind


@pytest.fixture
def temp_directory(tmp_path):
    # Create a temporary directory structure
    (tmp_path / "dir1").mkdir()
    (tmp_path / "dir1" / "file1.txt").touch()
    (tmp_path / "dir2").mkdir()
    (tmp_path / "dir2" / "file2.py").touch()
    (tmp_path / "dir2" / "file2.pyc").touch()
    return tmp_path


def test_fs_tree_initialization(temp_directory):
    fs_tree = FsTree(str(temp_directory))
    assert fs_tree.root_path == Path(temp_directory)
    assert fs_tree.permission_action is PermissionAction.IGNORE
    assert fs_tree._tree is None


def test_fs_tree_build(temp_directory):
    tree = FsTree(str(temp_directory)).get_tree()
    assert tree is not None
    assert tree.name == temp_directory.name
    assert len(tree.children) == 2  # dir1 and dir2


def test_fs_tree_is_built_once(temp_directory):
    fs_tree = FsTree(temp_directory)
    assert fs_tree.get_tree() is fs_tree.get_tree()


def test_fs_tree_refresh(temp_directory):
    fs_tree = FsTree(str(temp_directory))
    fs_tree.get_tree()
    (temp_directory / "new_file.txt").touch()
    assert fs_tree.find(temp_directory / "new_file.txt") is None

    fs_tree.refresh()

    assert fs_tree.find(temp_directory / "new_file.txt", NodeKind.FILE) is not None


def test_fs_tree_non_existent_directory():
    with pytest.raises(FileNotFoundError):
        FsTree("/non/existent/directory").get_tree()


def test_fs_tree_file_as_root(temp_directory):
    fs_tree = FsTree(temp_directory / "dir1" / "file1.txt")
    tree = fs_tree.get_tree()
    assert tree.kind is NodeKind.FILE
    assert fs_tree.get_file_count() == 1
    assert fs_tree.get_directory_count() == 0


def test_fs_tree_current_directory(temp_directory, monkeypatch):
    monkeypatch.chdir(temp_directory / "dir1")
    tree = FsTree(".").get_tree()
    assert tree is not None
    assert tree.name == "dir1"
    assert [child.name for child in tree.children] == ["file1.txt"]


def test_counts(temp_directory):
    fs_tree = FsTree(temp_directory)
    assert fs_tree.get_file_count() == 3
    assert fs_tree.get_directory_count() == 2


def test_iterate_files(temp_directory):
    files = list(FsTree(temp_directory).iterate_files())
    relative = sorted(rel for _, rel in files)
    assert relative == ["dir1/file1.txt", "dir2/file2.py", "dir2/file2.pyc"]
    for abs_path, _ in files:
        assert os.path.isabs(abs_path)


def test_find(temp_directory):
    fs_tree = FsTree(temp_directory)
    assert fs_tree.find(temp_directory) is fs_tree.get_tree()
    assert fs_tree.find(temp_directory, NodeKind.FILE) is None
    assert fs_tree.find(temp_directory / "dir2" / "file2.py", NodeKind.FILE).name == "file2.py"
    assert fs_tree.find(temp_directory / "dir2" / "file2.py", NodeKind.DIRECTORY) is None
    assert fs_tree.find(temp_directory / "dir3" / "file2.py") is None
    assert fs_tree.find("/somewhere/else") is None


def test_remove(temp_directory):
    fs_tree = FsTree(temp_directory)
    removed = fs_tree.remove(temp_directory / "dir2" / "file2.pyc", NodeKind.FILE)

    assert removed is not None
    assert removed.parent is None
    assert fs_tree.find(temp_directory / "dir2" / "file2.pyc") is None
    assert fs_tree.get_file_count() == 2
    assert fs_tree.remove(temp_directory / "dir2" / "file2.pyc") is None


def test_tree_representation(tmp_path):
    root = tmp_path / "root"
    (root / "sub").mkdir(parents=True)
    (root / "sub" / "b.txt").touch()

    lines = FsTree(root).get_tree_representation().splitlines()

    assert lines == ["root/", "└── sub/", "    └── b.txt"]


def test_tree_representation_follows_stored_order(temp_directory):
    fs_tree = FsTree(temp_directory)
    tree = fs_tree.get_tree()
    names = [child.name for child in tree.children]

    lines = list(fs_tree.stream_tree_representation())

    assert lines[0] == f"{temp_directory.name}/"
    top_level = [line[4:] for line in lines[1:] if line.startswith(("├── ", "└── "))]
    assert top_level == [f"{name}/" for name in names]


def test_exclusions(temp_directory):
    rules = GitIgnoreExclusionRules()
    rules.add_rule("*.pyc")
    fs_tree = FsTree(temp_directory, exclusion_rules=rules)
    dir2 = fs_tree.find(temp_directory / "dir2", NodeKind.DIRECTORY)
    assert [child.name for child in dir2.children] == ["file2.py"]
    assert "file2.pyc" not in fs_tree.get_tree_representation()


def test_directory_exclusion_with_trailing_slash(temp_directory):
    (temp_directory / "mydir" / "subdir").mkdir(parents=True)
    (temp_directory / "mydir" / "subdir" / "file.txt").touch()

    rules = GitIgnoreExclusionRules()
    rules.add_rule("mydir/")
    fs_tree = FsTree(temp_directory, exclusion_rules=rules)

    assert fs_tree.find(temp_directory / "mydir") is None
    assert "mydir" not in fs_tree.get_tree_representation()


def test_issues_are_collected(temp_directory, monkeypatch):
    real_scandir = os.scandir

    def scandir(path):
        if Path(path) == temp_directory / "dir1":
            raise PermissionError(13, "Permission denied", str(path))
        return real_scandir(path)

    monkeypatch.setattr(os, "scandir", scandir)
    fs_tree = FsTree(temp_directory)
    fs_tree.get_tree()

    assert [(issue.kind, issue.path) for issue in fs_tree.issues] == [
        (IssueKind.UNREADABLE_DIRECTORY, temp_directory / "dir1")
    ]
    assert fs_tree.get_file_count() == 2

    monkeypatch.setattr(os, "scandir", real_scandir)
    fs_tree.refresh()
    assert fs_tree.issues == []


def test_permission_action_raise(temp_directory, monkeypatch):
    real_scandir = os.scandir

    def scandir(path):
        if Path(path) == temp_directory / "dir1":
            raise PermissionError(13, "Permission denied", str(path))
        return real_scandir(path)

    monkeypatch.setattr(os, "scandir", scandir)
    with pytest.raises(PermissionError):
        FsTree(temp_directory, permission_action="raise").get_tree()


def test_unnamed_root_yields_empty_tree():
    fs_tree = FsTree("/")
    assert fs_tree.get_tree() is None
    assert list(fs_tree.iterate_files()) == []
    assert fs_tree.find("/etc") is None
    assert fs_tree.get_file_count() == 0
    assert fs_tree.get_tree_representation() == ""
