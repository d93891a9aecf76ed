from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from reducer.contracts import Transform, TransformInfo, TransformNotFoundError, TransformRegistry


@dataclass
class DictTransformRegistry(TransformRegistry):
    transforms: dict[str, Transform]

    def get(self, transform_key: str) -> Transform:
        try:
            return self.transforms[transform_key]
        except KeyError as e:
            raise TransformNotFoundError(transform_key) from e

    def list(self) -> Iterable[TransformInfo]:
        return [t.info for t in sorted(self.transforms.values(), key=lambda t: t.info.key)]
