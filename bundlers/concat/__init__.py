from .plugin import ConcatTransform

__all__ = ["ConcatTransform"]
