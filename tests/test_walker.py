"""Tests for directory walking and fingerprinting."""

from __future__ import annotations

import os

from projecthealth.walker import compute_fingerprint, hash_file, walk_directory


def test_walk_skips_ignored_and_hidden_entries(project_builder) -> None:
    project_builder.write(
        {
            "src/app.ts": "export const app = 1;\n",
            "node_modules/pkg/index.js": "module.exports = {};\n",
            ".git/HEAD": "ref: refs/heads/main\n",
            ".env": "SECRET=1\n",
            ".claude/settings.json": "{}\n",
        }
    )

    paths = {entry.relative_path for entry in walk_directory(project_builder.path())}

    assert paths == {"src", "src/app.ts", ".claude", ".claude/settings.json"}


def test_walk_reports_directories_and_sizes(project_builder) -> None:
    project_builder.write({"docs/guide.md": "hello\n"})

    entries = {entry.relative_path: entry for entry in walk_directory(project_builder.path())}

    assert entries["docs"].is_directory is True
    assert entries["docs/guide.md"].is_directory is False
    assert entries["docs/guide.md"].size == len("hello\n")
    assert entries["docs/guide.md"].path == str(project_builder.path() / "docs" / "guide.md")


def test_walk_order_is_deterministic(project_builder) -> None:
    project_builder.write({"b.ts": "b", "a.ts": "a", "c/d.ts": "d"})

    first = [entry.relative_path for entry in walk_directory(project_builder.path())]
    second = [entry.relative_path for entry in walk_directory(project_builder.path())]

    assert first == second == ["a.ts", "b.ts", "c", "c/d.ts"]


def test_custom_ignore_replaces_defaults(project_builder) -> None:
    project_builder.write({"dist/out.js": "x", "tmp/scratch.txt": "y"})

    paths = {entry.relative_path for entry in walk_directory(project_builder.path(), ["tmp"])}

    assert "dist/out.js" in paths
    assert "tmp" not in paths


def test_missing_directory_yields_no_entries(tmp_path) -> None:
    assert walk_directory(tmp_path / "absent") == []


def test_fingerprint_stable_for_unchanged_tree(project_builder) -> None:
    project_builder.write({"a.ts": "one", "lib/b.ts": "two"})

    first = compute_fingerprint(walk_directory(project_builder.path()))
    second = compute_fingerprint(walk_directory(project_builder.path()))

    assert first == second
    assert len(first) == 64


def test_fingerprint_changes_when_mtime_changes(project_builder) -> None:
    project_builder.write({"a.ts": "one"})
    before = compute_fingerprint(walk_directory(project_builder.path()))

    project_builder.age(["a.ts"], days=3)
    after = compute_fingerprint(walk_directory(project_builder.path()))

    assert before != after


def test_fingerprint_changes_when_size_changes(project_builder) -> None:
    project_builder.write({"a.ts": "one"})
    target = project_builder.path() / "a.ts"
    stat = target.stat()
    before = compute_fingerprint(walk_directory(project_builder.path()))

    target.write_text("one more", encoding="utf-8")
    os.utime(target, ns=(stat.st_atime_ns, stat.st_mtime_ns))
    after = compute_fingerprint(walk_directory(project_builder.path()))

    assert before != after


def test_fingerprint_ignores_content_with_same_size_and_mtime(project_builder) -> None:
    project_builder.write({"a.ts": "aaa"})
    target = project_builder.path() / "a.ts"
    stat = target.stat()
    before = compute_fingerprint(walk_directory(project_builder.path()))

    target.write_text("bbb", encoding="utf-8")
    os.utime(target, ns=(stat.st_atime_ns, stat.st_mtime_ns))
    after = compute_fingerprint(walk_directory(project_builder.path()))

    assert before == after


def test_fingerprint_excludes_directories(project_builder) -> None:
    project_builder.write({"a.ts": "one"})
    before = compute_fingerprint(walk_directory(project_builder.path()))

    project_builder.mkdir("empty")
    after = compute_fingerprint(walk_directory(project_builder.path()))

    assert before == after


def test_hash_file_matches_for_identical_content(project_builder) -> None:
    project_builder.write({"a.txt": "same", "b.txt": "same", "c.txt": "different"})
    root = project_builder.path()

    assert hash_file(root / "a.txt") == hash_file(root / "b.txt")
    assert hash_file(root / "a.txt") != hash_file(root / "c.txt")
