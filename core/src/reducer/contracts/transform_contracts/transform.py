from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from reducer.contracts.build_contracts.build_context import BuildContext
from reducer.contracts.build_contracts.build_spec import TargetSpec


@dataclass(frozen=True, slots=True)
class TransformInfo:
    key: str
    name: str
    version: str = "0.1.0"
    description: str | None = None


@runtime_checkable
class Transform(Protocol):
    """
    Transform interface contract.

    Transforms are concrete bundling strategies (concatenation, CSS, JS, ...)
    that core orchestrates. They read `target.inputs` and return the output
    payload; writing it is the runner's job.
    """

    @property
    def info(self) -> TransformInfo: ...

    def run(self, target: TargetSpec, *, context: BuildContext) -> bytes:
        """Return the bytes to write to `target.output`."""
        ...
