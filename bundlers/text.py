from __future__ import annotations

from collections.abc import Iterator

from reducer.contracts import TargetSpec
from reducer.runtime import read_input

_BOM = "\ufeff"


def normalize_text(text: str) -> str:
    """Drop a leading BOM and convert CRLF / CR line endings to LF."""
    if text.startswith(_BOM):
        text = text[len(_BOM) :]
    return text.replace("\r\n", "\n").replace("\r", "\n")


def trim_chunk(text: str) -> str:
    """Strip blank lines around a chunk and trailing whitespace at its end."""
    return text.strip("\n").rstrip()


def iter_text_inputs(target: TargetSpec, *, encoding: str) -> Iterator[tuple[str, str]]:
    """Yield (relative path, normalized text) for every input, in order."""
    for path in target.inputs:
        raw = read_input(path, target=target.name)
        try:
            text = raw.decode(encoding)
        except UnicodeDecodeError as exc:
            raise ValueError(f"{target.relative_input(path)} is not valid {encoding}") from exc
        yield target.relative_input(path), normalize_text(text)


def format_banner(banner: str | None) -> str:
    """Render a banner as a preserved `/*! ... */` comment line, or nothing."""
    if not banner:
        return ""
    return f"/*! {trim_chunk(normalize_text(banner)).strip()} */\n"
