from __future__ import annotations

import difflib
import hashlib
import logging
from collections.abc import Iterable, Sequence
from pathlib import Path

from reducer.contracts import ComparisonEntry, ComparisonOutcome

logger = logging.getLogger("reducer.verify")

DEFAULT_PATTERNS: tuple[str, ...] = ("**/*",)

_CHUNK_SIZE = 64 * 1024
_MAX_DIFF_LINES = 20


class ComparisonMismatchError(AssertionError):
    def __init__(self, outcome: ComparisonOutcome):
        self.outcome = outcome
        super().__init__(outcome.format_report())


def compare_directories(
    actual: str | Path,
    expected: str | Path,
    patterns: Sequence[str] | str = DEFAULT_PATTERNS,
) -> ComparisonOutcome:
    """
    Compare two directory trees, restricted to files matching `patterns`.

    Neither tree is modified. A missing `actual` tree counts as empty so a
    build that produced nothing reports every expected file as missing; a
    missing `expected` tree raises FileNotFoundError.
    """
    actual_dir = Path(actual)
    expected_dir = Path(expected)
    pattern_list = (patterns,) if isinstance(patterns, str) else tuple(patterns)
    if not pattern_list:
        raise ValueError("at least one pattern is required")
    if any(not pattern.strip() for pattern in pattern_list):
        raise ValueError(f"patterns must be non-empty globs, got {list(pattern_list)!r}")
    if not expected_dir.is_dir():
        raise FileNotFoundError(f"Expected directory not found: {expected_dir}")

    actual_files = collect_files(actual_dir, pattern_list)
    expected_files = collect_files(expected_dir, pattern_list)

    entries: list[ComparisonEntry] = []
    for rel in sorted(expected_files - actual_files):
        entries.append(ComparisonEntry(kind="missing_in_actual", path=rel))
    for rel in sorted(actual_files - expected_files):
        entries.append(ComparisonEntry(kind="missing_in_expected", path=rel))

    shared = sorted(actual_files & expected_files)
    for rel in shared:
        actual_path = actual_dir / rel
        expected_path = expected_dir / rel
        if not files_equal(actual_path, expected_path):
            entries.append(
                ComparisonEntry(
                    kind="content_mismatch",
                    path=rel,
                    detail=_describe_mismatch(actual_path, expected_path),
                )
            )

    entries.sort(key=lambda entry: (entry.path, entry.kind))
    outcome = ComparisonOutcome(
        actual_dir=actual_dir,
        expected_dir=expected_dir,
        patterns=pattern_list,
        compared_files=len(actual_files | expected_files),
        entries=tuple(entries),
    )
    if outcome.ok:
        logger.debug("Directories match: %s == %s", actual_dir, expected_dir)
    else:
        logger.info(
            "Directories differ: %s vs %s (%d difference(s))",
            actual_dir,
            expected_dir,
            len(outcome.entries),
        )
    return outcome


def assert_directories_match(
    actual: str | Path,
    expected: str | Path,
    patterns: Sequence[str] | str = DEFAULT_PATTERNS,
) -> ComparisonOutcome:
    outcome = compare_directories(actual, expected, patterns)
    if not outcome.ok:
        raise ComparisonMismatchError(outcome)
    return outcome


def collect_files(root: Path, patterns: Iterable[str]) -> set[str]:
    """Posix paths, relative to `root`, of regular files matching any pattern."""
    if not root.is_dir():
        return set()
    found: set[str] = set()
    for pattern in patterns:
        for path in root.glob(pattern):
            if path.is_file():
                found.add(path.relative_to(root).as_posix())
    return found


def files_equal(left: Path, right: Path) -> bool:
    if left.stat().st_size != right.stat().st_size:
        return False
    return file_digest(left) == file_digest(right)


def file_digest(path: Path) -> str:
    digest = hashlib.sha256()
    with path.open("rb") as handle:
        for chunk in iter(lambda: handle.read(_CHUNK_SIZE), b""):
            digest.update(chunk)
    return digest.hexdigest()


def _describe_mismatch(actual_path: Path, expected_path: Path) -> str:
    actual_bytes = actual_path.read_bytes()
    expected_bytes = expected_path.read_bytes()
    summary = f"size actual={len(actual_bytes)} expected={len(expected_bytes)}"
    try:
        actual_text = actual_bytes.decode("utf-8")
        expected_text = expected_bytes.decode("utf-8")
    except UnicodeDecodeError:
        return f"{summary} (binary)"

    diff = list(
        difflib.unified_diff(
            expected_text.splitlines(),
            actual_text.splitlines(),
            fromfile=f"expected/{expected_path.name}",
            tofile=f"actual/{actual_path.name}",
            lineterm="",
        )
    )
    if not diff:
        # Same lines, so the difference is in line endings or a trailing newline.
        return f"{summary} (whitespace/line endings only)"
    if len(diff) > _MAX_DIFF_LINES:
        diff = diff[:_MAX_DIFF_LINES] + [f"... {len(diff) - _MAX_DIFF_LINES} more diff line(s)"]
    return "\n".join([summary, *diff])
