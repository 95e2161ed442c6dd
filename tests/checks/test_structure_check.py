"""Tests for the directory structure check."""

from __future__ import annotations

from projecthealth.checks.structure import StructureCheck


def _run(builder):
    return StructureCheck().run(builder.walk(), builder.path())


def test_ten_component_path_is_critical(project_builder) -> None:
    project_builder.write({"a/b/c/d/e/f/g/h/i/deep.ts": "export {};\n"})

    issues = _run(project_builder)

    assert len(issues) == 1
    issue = issues[0]
    assert issue.severity == "critical"
    assert issue.title == "Deep directory nesting (10 levels)"
    assert issue.file_paths == ["a/b/c/d/e/f/g/h/i/deep.ts"]
    assert issue.description.startswith("Deepest path: a/b/c/d/e/f/g/h/i/deep.ts.")


def test_seven_components_is_a_warning(project_builder) -> None:
    project_builder.write({"a/b/c/d/e/f/leaf.ts": "x"})

    issues = _run(project_builder)

    assert [(issue.severity, issue.title) for issue in issues] == [
        ("warning", "Deep directory nesting (7 levels)")
    ]


def test_six_components_is_fine(project_builder) -> None:
    project_builder.write({"a/b/c/d/e/leaf.ts": "x"})

    assert _run(project_builder) == []


def test_crowded_directory_thresholds(project_builder) -> None:
    project_builder.write({f"warn/file{index}.ts": "x" for index in range(31)})
    project_builder.write({f"crit/file{index}.ts": "x" for index in range(51)})
    project_builder.write({f"ok/file{index}.ts": "x" for index in range(30)})

    issues = {issue.file_paths[0]: issue for issue in _run(project_builder)}

    assert set(issues) == {"warn", "crit"}
    assert issues["warn"].severity == "warning"
    assert issues["warn"].title == "warn/ has 31 files"
    assert issues["crit"].severity == "critical"


def test_root_directory_is_never_crowded(project_builder) -> None:
    project_builder.write({f"file{index}.md": "x" for index in range(60)})

    assert _run(project_builder) == []


def test_empty_leaf_directories_are_info(project_builder) -> None:
    project_builder.mkdir("empty", "parent/child")
    project_builder.write({"full/file.ts": "x"})

    issues = _run(project_builder)

    assert sorted((issue.severity, issue.file_paths[0]) for issue in issues) == [
        ("info", "empty"),
        ("info", "parent/child"),
    ]


def test_ids_are_stable(project_builder) -> None:
    project_builder.mkdir("empty")
    project_builder.write({"a/b/c/d/e/f/g/leaf.ts": "x"})

    assert [issue.id for issue in _run(project_builder)] == [issue.id for issue in _run(project_builder)]
