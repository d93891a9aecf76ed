from .plugin import JsTransform

__all__ = ["JsTransform"]
