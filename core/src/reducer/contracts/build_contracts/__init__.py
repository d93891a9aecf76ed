from .build_config import BuildConfig, TargetConfig
from .build_context import BuildContext
from .build_result import BuildResult, TargetResult
from .build_spec import BuildSpec, TargetSpec

__all__ = [
    "BuildConfig",
    "TargetConfig",
    "BuildContext",
    "BuildResult",
    "TargetResult",
    "BuildSpec",
    "TargetSpec",
]
