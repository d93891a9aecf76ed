from __future__ import annotations

from typing import Any

from reducer.contracts import (
    BuildContext,
    ConfigurableTransform,
    TargetSpec,
    Transform,
    TransformInfo,
)

from bundlers.text import iter_text_inputs

from .bundle import bundle_js
from .config import default_params, parse_config, validate_params


class JsTransform(Transform, ConfigurableTransform):
    @property
    def info(self) -> TransformInfo:
        return TransformInfo(
            key="js",
            name="JavaScript Bundle",
            version="0.1.0",
            description="Concatenate scripts, optionally wrapping each one in an IIFE.",
        )

    def run(self, target: TargetSpec, *, context: BuildContext) -> bytes:
        config = parse_config(target.params)
        chunks = list(iter_text_inputs(target, encoding=config.encoding))
        context.logger.debug("js %s: %d script(s), wrap=%s", target.name, len(chunks), config.wrap)
        return bundle_js(chunks, config).encode("utf-8")

    def default_params(self) -> dict[str, Any]:
        return default_params()

    def validate_params(self, params: dict[str, Any], *, strict: bool = True) -> dict[str, Any]:
        return validate_params(params, strict=strict)
