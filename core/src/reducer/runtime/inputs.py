from __future__ import annotations

import glob
from collections.abc import Iterable
from pathlib import Path

from reducer.errors import InputNotFoundError

_GLOB_CHARS = frozenset("*?[")


def is_glob(pattern: str) -> bool:
    return any(char in _GLOB_CHARS for char in pattern)


def expand_inputs(
    patterns: Iterable[str],
    *,
    basedir: Path,
    target: str | None = None,
    exclude_dir: Path | None = None,
) -> list[Path]:
    """
    Expand declared input paths and globs into an ordered list of files.

    Declared order is kept across entries; matches of one glob are sorted.
    Glob matches under `exclude_dir` are skipped; literal paths are kept.
    A literal path that is missing, or a glob that matches no file, raises
    InputNotFoundError.
    """
    resolved: list[Path] = []
    seen: set[Path] = set()
    for pattern in patterns:
        for path in _expand_one(pattern, basedir=basedir, target=target, exclude_dir=exclude_dir):
            if path not in seen:
                seen.add(path)
                resolved.append(path)
    return resolved


def _expand_one(
    pattern: str,
    *,
    basedir: Path,
    target: str | None,
    exclude_dir: Path | None,
) -> list[Path]:
    candidate = Path(pattern).expanduser()
    if not candidate.is_absolute():
        candidate = basedir / candidate

    if not is_glob(pattern):
        if not candidate.is_file():
            raise InputNotFoundError(pattern, target=target, basedir=basedir)
        return [candidate.resolve()]

    matches = sorted(
        path
        for path in (Path(match).resolve() for match in glob.glob(str(candidate), recursive=True))
        if path.is_file() and not _is_under(path, exclude_dir)
    )
    if not matches:
        raise InputNotFoundError(pattern, target=target, basedir=basedir)
    return matches


def _is_under(path: Path, directory: Path | None) -> bool:
    return directory is not None and directory in path.parents


def ensure_inputs_exist(paths: Iterable[Path], *, target: str | None = None) -> None:
    for path in paths:
        if not path.is_file():
            raise InputNotFoundError(str(path), target=target)


def read_input(path: Path, *, target: str | None = None) -> bytes:
    try:
        return path.read_bytes()
    except (FileNotFoundError, IsADirectoryError) as exc:
        raise InputNotFoundError(str(path), target=target) from exc
