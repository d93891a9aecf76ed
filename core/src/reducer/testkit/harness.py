from __future__ import annotations

import shutil
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from reducer.api import ConfigInput, reduce
from reducer.contracts import BuildResult, ComparisonOutcome, TransformRegistry
from reducer.verify import DEFAULT_PATTERNS, compare_directories


@dataclass(frozen=True, slots=True)
class HarnessRun:
    build: BuildResult
    comparison: ComparisonOutcome

    @property
    def ok(self) -> bool:
        return self.comparison.ok


def clear_directory(path: str | Path) -> None:
    """Remove a directory tree if present; a missing tree is not an error."""
    target = Path(path)
    if target.is_dir():
        shutil.rmtree(target)
    elif target.exists():
        target.unlink()


def run_and_compare(
    config: ConfigInput,
    *,
    build_dir: str | Path,
    expected_dir: str | Path,
    patterns: Sequence[str] | str = DEFAULT_PATTERNS,
    registry: TransformRegistry | None = None,
    base_dir: str | Path | None = None,
) -> HarnessRun:
    """
    Clear `build_dir`, build `config`, then compare `build_dir` with `expected_dir`.

    The steps run strictly in order; build errors propagate.
    """
    clear_directory(build_dir)
    build = reduce(config, registry=registry, base_dir=base_dir)
    comparison = compare_directories(build_dir, expected_dir, patterns)
    return HarnessRun(build=build, comparison=comparison)
