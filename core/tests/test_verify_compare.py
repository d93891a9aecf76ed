from __future__ import annotations

import shutil
from pathlib import Path

import pytest

from reducer.verify import (
    ComparisonMismatchError,
    assert_directories_match,
    collect_files,
    compare_directories,
)


def _write(path: Path, payload: bytes | str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(payload, str):
        payload = payload.encode("utf-8")
    path.write_bytes(payload)


@pytest.fixture()
def expected_tree(tmp_path: Path) -> Path:
    root = tmp_path / "expected"
    _write(root / "bundle.css", ".a{color:red}\n")
    _write(root / "bundle.js", "var a = 1;\n")
    _write(root / "nested" / "deep.css", ".deep{}\n")
    _write(root / "notes.txt", "ignored by css/js patterns\n")
    return root


def _snapshot(root: Path) -> dict[str, bytes]:
    return {p.relative_to(root).as_posix(): p.read_bytes() for p in root.rglob("*") if p.is_file()}


def test_identical_trees_have_no_entries(tmp_path: Path, expected_tree: Path) -> None:
    actual = tmp_path / "actual"
    shutil.copytree(expected_tree, actual)

    outcome = compare_directories(actual, expected_tree, ["**/*.css", "**/*.js"])

    assert outcome.ok
    assert outcome.entries == ()
    assert outcome.compared_files == 3


def test_missing_file_reports_exactly_one_missing_in_actual(
    tmp_path: Path, expected_tree: Path
) -> None:
    actual = tmp_path / "actual"
    shutil.copytree(expected_tree, actual)
    (actual / "nested" / "deep.css").unlink()

    outcome = compare_directories(actual, expected_tree, ["**/*.css", "**/*.js"])

    assert not outcome.ok
    assert outcome.missing_in_actual == ["nested/deep.css"]
    assert outcome.missing_in_expected == []
    assert outcome.content_mismatches == []
    assert len(outcome.entries) == 1


def test_extra_file_reports_missing_in_expected(tmp_path: Path, expected_tree: Path) -> None:
    actual = tmp_path / "actual"
    shutil.copytree(expected_tree, actual)
    _write(actual / "extra.js", "var extra;\n")

    outcome = compare_directories(actual, expected_tree, ["**/*.js"])

    assert [(e.kind, e.path) for e in outcome.entries] == [("missing_in_expected", "extra.js")]


def test_single_corrupted_byte_reports_one_content_mismatch(
    tmp_path: Path, expected_tree: Path
) -> None:
    actual = tmp_path / "actual"
    shutil.copytree(expected_tree, actual)
    target = actual / "bundle.css"
    data = bytearray(target.read_bytes())
    data[1] = ord("b")
    target.write_bytes(bytes(data))

    outcome = compare_directories(actual, expected_tree, ["**/*.css", "**/*.js"])

    assert [(e.kind, e.path) for e in outcome.entries] == [("content_mismatch", "bundle.css")]
    detail = outcome.entries[0].detail or ""
    assert "-.a{color:red}" in detail
    assert "+.b{color:red}" in detail


def test_patterns_restrict_the_compared_files(tmp_path: Path, expected_tree: Path) -> None:
    actual = tmp_path / "actual"
    shutil.copytree(expected_tree, actual)
    (actual / "notes.txt").write_text("changed\n", encoding="utf-8")

    assert compare_directories(actual, expected_tree, ["**/*.css", "**/*.js"]).ok
    outcome = compare_directories(actual, expected_tree, "**/*.txt")
    assert outcome.content_mismatches == ["notes.txt"]


def test_top_level_files_match_double_star_patterns(expected_tree: Path) -> None:
    assert collect_files(expected_tree, ["**/*.css"]) == {"bundle.css", "nested/deep.css"}


def test_line_ending_only_difference_is_described(tmp_path: Path, expected_tree: Path) -> None:
    actual = tmp_path / "actual"
    shutil.copytree(expected_tree, actual)
    _write(actual / "bundle.js", "var a = 1;\r\n")

    outcome = compare_directories(actual, expected_tree, ["**/*.js"])

    assert outcome.content_mismatches == ["bundle.js"]
    assert "line endings" in (outcome.entries[0].detail or "")


def test_binary_mismatch_is_reported_without_diff(tmp_path: Path) -> None:
    expected = tmp_path / "expected"
    actual = tmp_path / "actual"
    _write(expected / "blob.bin", b"\xff\xfe\x00")
    _write(actual / "blob.bin", b"\xff\xfe\x01")

    outcome = compare_directories(actual, expected, ["*.bin"])

    assert outcome.content_mismatches == ["blob.bin"]
    assert "(binary)" in (outcome.entries[0].detail or "")


def test_missing_actual_tree_counts_as_empty(tmp_path: Path, expected_tree: Path) -> None:
    outcome = compare_directories(tmp_path / "never-built", expected_tree, ["**/*.css"])

    assert outcome.missing_in_actual == ["bundle.css", "nested/deep.css"]


def test_missing_expected_tree_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError, match="Expected directory not found"):
        compare_directories(tmp_path, tmp_path / "missing")


def test_empty_pattern_list_is_rejected(tmp_path: Path, expected_tree: Path) -> None:
    with pytest.raises(ValueError, match="at least one pattern"):
        compare_directories(tmp_path, expected_tree, [])


@pytest.mark.parametrize("patterns", [["**/*.css", ""], "  "])
def test_blank_patterns_are_rejected(tmp_path: Path, expected_tree: Path, patterns) -> None:
    with pytest.raises(ValueError, match="non-empty globs"):
        compare_directories(tmp_path, expected_tree, patterns)


def test_comparison_does_not_mutate_trees(tmp_path: Path, expected_tree: Path) -> None:
    actual = tmp_path / "actual"
    shutil.copytree(expected_tree, actual)
    (actual / "bundle.js").write_text("changed\n", encoding="utf-8")
    before_actual = _snapshot(actual)
    before_expected = _snapshot(expected_tree)

    compare_directories(actual, expected_tree)

    assert _snapshot(actual) == before_actual
    assert _snapshot(expected_tree) == before_expected


def test_assert_directories_match_raises_with_report(tmp_path: Path, expected_tree: Path) -> None:
    actual = tmp_path / "actual"
    shutil.copytree(expected_tree, actual)
    (actual / "bundle.js").unlink()

    with pytest.raises(ComparisonMismatchError) as excinfo:
        assert_directories_match(actual, expected_tree, ["**/*.js"])

    assert isinstance(excinfo.value, AssertionError)
    assert excinfo.value.outcome.missing_in_actual == ["bundle.js"]
    assert "missing_in_actual: bundle.js" in str(excinfo.value)


def test_format_report_lists_counts(tmp_path: Path, expected_tree: Path) -> None:
    actual = tmp_path / "actual"
    shutil.copytree(expected_tree, actual)

    report = compare_directories(actual, expected_tree, ["**/*.css"]).format_report()

    assert "2 file(s), 0 difference(s)" in report
