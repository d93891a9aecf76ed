"""Declarative asset bundling with golden-directory verification."""

from reducer.api import reduce, run_build, run_from_config
from reducer.errors import (
    ConfigError,
    InputNotFoundError,
    OutputWriteError,
    ReduceError,
    TransformError,
)
from reducer.verify import ComparisonMismatchError, assert_directories_match, compare_directories

__version__ = "0.1.0"

__all__ = [
    "reduce",
    "run_build",
    "run_from_config",
    "compare_directories",
    "assert_directories_match",
    "ReduceError",
    "ConfigError",
    "InputNotFoundError",
    "OutputWriteError",
    "TransformError",
    "ComparisonMismatchError",
]
