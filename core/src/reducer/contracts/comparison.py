from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

EntryKind = Literal["missing_in_actual", "missing_in_expected", "content_mismatch"]


@dataclass(frozen=True, slots=True)
class ComparisonEntry:
    kind: EntryKind
    path: str  # posix path relative to both roots
    detail: str | None = None


@dataclass(frozen=True, slots=True)
class ComparisonOutcome:
    """
    Result of diffing two directory trees under a set of glob patterns.

    `entries` is sorted by path, then kind, so reports are stable across runs.
    """

    actual_dir: Path
    expected_dir: Path
    patterns: Sequence[str]
    compared_files: int
    entries: Sequence[ComparisonEntry] = field(default_factory=tuple)

    @property
    def ok(self) -> bool:
        return not self.entries

    @property
    def missing_in_actual(self) -> list[str]:
        return [entry.path for entry in self.entries if entry.kind == "missing_in_actual"]

    @property
    def missing_in_expected(self) -> list[str]:
        return [entry.path for entry in self.entries if entry.kind == "missing_in_expected"]

    @property
    def content_mismatches(self) -> list[str]:
        return [entry.path for entry in self.entries if entry.kind == "content_mismatch"]

    def format_report(self) -> str:
        header = (
            f"compared {self.actual_dir} against {self.expected_dir} "
            f"[{', '.join(self.patterns)}]: {self.compared_files} file(s), "
            f"{len(self.entries)} difference(s)"
        )
        lines = [header]
        for entry in self.entries:
            lines.append(f"  {entry.kind}: {entry.path}")
            if entry.detail:
                lines.extend(f"    {line}" for line in entry.detail.splitlines())
        return "\n".join(lines)
