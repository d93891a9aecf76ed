"""Directory tree comparison against golden fixtures."""

from reducer.verify.compare import (
    DEFAULT_PATTERNS,
    ComparisonMismatchError,
    assert_directories_match,
    collect_files,
    compare_directories,
)

__all__ = [
    "DEFAULT_PATTERNS",
    "ComparisonMismatchError",
    "assert_directories_match",
    "collect_files",
    "compare_directories",
]
