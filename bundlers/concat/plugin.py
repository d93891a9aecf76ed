from __future__ import annotations

from typing import Any

from reducer.contracts import (
    BuildContext,
    ConfigurableTransform,
    TargetSpec,
    Transform,
    TransformInfo,
)
from reducer.runtime import read_input

from .config import default_params, parse_config, validate_params


class ConcatTransform(Transform, ConfigurableTransform):
    @property
    def info(self) -> TransformInfo:
        return TransformInfo(
            key="concat",
            name="Concatenate",
            version="0.1.0",
            description="Byte-for-byte concatenation of the inputs in declared order.",
        )

    def run(self, target: TargetSpec, *, context: BuildContext) -> bytes:
        config = parse_config(target.params)
        separator = config.separator.encode("utf-8")

        payload = separator.join(read_input(path, target=target.name) for path in target.inputs)
        if config.trailing_newline and not payload.endswith(b"\n"):
            payload += b"\n"

        context.logger.debug("concat %s: %d input(s)", target.name, len(target.inputs))
        return payload

    def default_params(self) -> dict[str, Any]:
        return default_params()

    def validate_params(self, params: dict[str, Any], *, strict: bool = True) -> dict[str, Any]:
        return validate_params(params, strict=strict)
