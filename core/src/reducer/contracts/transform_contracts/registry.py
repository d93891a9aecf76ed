from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol, runtime_checkable

from reducer.contracts.transform_contracts.transform import Transform, TransformInfo


class TransformNotFoundError(KeyError):
    pass


@runtime_checkable
class TransformRegistry(Protocol):
    def get(self, transform_key: str) -> Transform:
        """Return transform for key or raise TransformNotFoundError."""
        ...

    def list(self) -> Iterable[TransformInfo]:
        """List available transforms (for the CLI / debugging)."""
        ...
