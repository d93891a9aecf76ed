from __future__ import annotations

from pathlib import Path


class ReduceError(Exception):
    """Base class for build failures raised by the reducer core."""


class ConfigError(ReduceError, ValueError):
    pass


class InputNotFoundError(ReduceError, FileNotFoundError):
    def __init__(self, pattern: str, *, target: str | None = None, basedir: Path | None = None):
        self.pattern = pattern
        self.target = target
        self.basedir = basedir
        location = f" (basedir {basedir})" if basedir is not None else ""
        owner = f"target '{target}': " if target else ""
        super().__init__(f"{owner}input not found: {pattern}{location}")


class OutputWriteError(ReduceError, OSError):
    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to write {path}: {reason}")


class TransformError(ReduceError, RuntimeError):
    def __init__(self, target: str, transform_key: str, reason: str):
        self.target = target
        self.transform_key = transform_key
        super().__init__(f"Transform '{transform_key}' failed for target '{target}': {reason}")
