from __future__ import annotations

from reducer.contracts import BuildContext, TargetSpec, Transform, TransformInfo
from reducer.runtime import read_input


class DummyTransform(Transform):
    """Joins inputs with a pipe; records every target it ran for."""

    def __init__(self, key: str = "dummy") -> None:
        self._key = key
        self.calls: list[str] = []

    @property
    def info(self) -> TransformInfo:
        return TransformInfo(key=self._key, name="Dummy Transform", version="0.1.0")

    def run(self, target: TargetSpec, *, context: BuildContext) -> bytes:
        self.calls.append(target.name)
        return b"|".join(read_input(path, target=target.name) for path in target.inputs)


class FailingTransform(Transform):
    @property
    def info(self) -> TransformInfo:
        return TransformInfo(key="fail", name="Failing Transform", version="0.0.1")

    def run(self, target: TargetSpec, *, context: BuildContext) -> bytes:
        raise ValueError("boom")
