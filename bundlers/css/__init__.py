from .plugin import CssTransform

__all__ = ["CssTransform"]
