from __future__ import annotations

import os
import shutil
import uuid
from pathlib import Path

from reducer.errors import OutputWriteError

_WRITE_TEST_NAME = ".write_test"


def prepare_output_dir(output_dir: Path, *, clean: bool = True) -> Path:
    """Delete (when `clean`) and recreate the output directory, then check it is writable."""
    if clean and output_dir.exists():
        if not output_dir.is_dir():
            raise OutputWriteError(output_dir, "output_dir exists and is not a directory")
        try:
            shutil.rmtree(output_dir)
        except OSError as exc:
            raise OutputWriteError(output_dir, f"unable to remove stale output: {exc}") from exc

    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise OutputWriteError(output_dir, str(exc)) from exc

    if not _validate_writable(output_dir):
        raise OutputWriteError(output_dir, "directory is not writable")
    return output_dir


def write_output(path: Path, payload: bytes) -> Path:
    """
    Write `payload` to `path` durably.

    The bytes go to a sibling temp file that is flushed, fsynced and then
    moved over `path`, so readers never observe a half-written output.
    """
    temp_path = path.parent / f".{path.name}.{uuid.uuid4().hex[:8]}.tmp"
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with temp_path.open("wb") as handle:
            handle.write(payload)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(temp_path, path)
    except OSError as exc:
        if temp_path.exists():
            temp_path.unlink()
        raise OutputWriteError(path, str(exc)) from exc
    return path


def _validate_writable(path: Path) -> bool:
    test_file = path / _WRITE_TEST_NAME
    try:
        with test_file.open("w", encoding="utf-8") as handle:
            handle.write("ok")
        test_file.unlink(missing_ok=True)
        return True
    except OSError:
        return False
