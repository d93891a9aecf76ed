from .build_contracts import (
    BuildConfig,
    BuildContext,
    BuildResult,
    BuildSpec,
    TargetConfig,
    TargetResult,
    TargetSpec,
)
from .comparison import ComparisonEntry, ComparisonOutcome
from .transform_contracts import (
    ConfigurableTransform,
    Transform,
    TransformInfo,
    TransformNotFoundError,
    TransformRegistry,
)

__all__ = [
    "BuildConfig",
    "TargetConfig",
    "BuildContext",
    "BuildSpec",
    "TargetSpec",
    "BuildResult",
    "TargetResult",
    "ComparisonEntry",
    "ComparisonOutcome",
    "Transform",
    "ConfigurableTransform",
    "TransformInfo",
    "TransformRegistry",
    "TransformNotFoundError",
]
