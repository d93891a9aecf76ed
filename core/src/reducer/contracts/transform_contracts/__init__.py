from .configurable_transform import ConfigurableTransform
from .registry import TransformNotFoundError, TransformRegistry
from .transform import Transform, TransformInfo

__all__ = [
    "Transform",
    "ConfigurableTransform",
    "TransformInfo",
    "TransformRegistry",
    "TransformNotFoundError",
]
