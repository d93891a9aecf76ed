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

from .bundle import bundle_css
from .config import default_params, parse_config, validate_params


class CssTransform(Transform, ConfigurableTransform):
    @property
    def info(self) -> TransformInfo:
        return TransformInfo(
            key="css",
            name="CSS Bundle",
            version="0.1.0",
            description="Concatenate stylesheets with charset hoisting and optional minification.",
        )

    def run(self, target: TargetSpec, *, context: BuildContext) -> bytes:
        config = parse_config(target.params)
        chunks = list(iter_text_inputs(target, encoding=config.encoding))
        bundled = bundle_css(chunks, config)
        context.logger.debug(
            "css %s: %d stylesheet(s), minify=%s",
            target.name,
            len(chunks),
            config.minify,
        )
        return bundled.encode("utf-8")

    def default_params(self) -> dict[str, Any]:
        return default_params()

    def validate_params(self, params: dict[str, Any], *, strict: bool = True) -> dict[str, Any]:
        return validate_params(params, strict=strict)
