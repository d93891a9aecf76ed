from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True, slots=True)
class TargetResult:
    name: str
    transform: str
    output: Path
    inputs: Sequence[Path]
    size: int
    sha256: str


@dataclass(frozen=True, slots=True)
class BuildResult:
    """
    Public build outcome contract.

    Returned only after every output has been written; the filesystem is the
    authoritative result, this is the receipt.
    """

    build_id: str

    started_at_utc: str
    ended_at_utc: str
    duration_s: float

    output_dir: Path
    targets: Sequence[TargetResult] = field(default_factory=tuple)
    manifest_path: Path | None = None

    def outputs(self) -> list[Path]:
        return [target.output for target in self.targets]

    def target(self, name: str) -> TargetResult:
        for target in self.targets:
            if target.name == name:
                return target
        raise KeyError(name)
