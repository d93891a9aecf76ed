"""Built-in bundling strategies for the reducer core."""

from __future__ import annotations

from reducer.orchestration.registry import DictTransformRegistry

from .concat import ConcatTransform
from .css import CssTransform
from .js import JsTransform


def default_registry() -> DictTransformRegistry:
    transforms = [ConcatTransform(), CssTransform(), JsTransform()]
    return DictTransformRegistry(transforms={t.info.key: t for t in transforms})


__all__ = ["ConcatTransform", "CssTransform", "JsTransform", "default_registry"]
