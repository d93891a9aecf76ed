from __future__ import annotations

from collections.abc import Iterable

from bundlers.text import format_banner, trim_chunk

from .config import JsParams

_USE_STRICT = "'use strict';\n"


def bundle_js(chunks: Iterable[tuple[str, str]], params: JsParams) -> str:
    """Join (relative path, normalized text) chunks into one script."""
    parts: list[str] = []
    for rel, text in chunks:
        chunk = trim_chunk(text)
        if not chunk:
            continue
        if params.wrap:
            chunk = f"(function () {{\n{chunk}\n}})();"
        else:
            chunk = terminate_statement(chunk)
        if params.source_comments:
            parts.append(f"// {rel}\n")
        parts.append(chunk + "\n")

    header = format_banner(params.banner)
    if params.use_strict:
        header += _USE_STRICT
    return header + "".join(parts)


def terminate_statement(chunk: str) -> str:
    """
    End a chunk with `;` so the next chunk cannot continue its last expression.

    A trailing line comment would swallow the semicolon, so it goes on its own line.
    """
    if chunk.endswith(";"):
        return chunk
    last_line = chunk.rsplit("\n", 1)[-1]
    if "//" in last_line:
        return chunk + "\n;"
    return chunk + ";"
