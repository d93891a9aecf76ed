"""CSS bundling: charset hoisting, optional source comments and minification."""

from __future__ import annotations

import re
from collections.abc import Iterable

from bundlers.text import format_banner, trim_chunk

from .config import CssParams

_CHARSET_RE = re.compile(r"""^@charset\s+("[^"]*"|'[^']*')\s*;""")

# Strings are matched first so comment markers and whitespace inside them survive.
_STRING = r""""(?:\\.|[^"\\\n])*"|'(?:\\.|[^'\\\n])*'"""
_COMMENT_RE = re.compile(rf"({_STRING})|(/\*.*?\*/)", re.DOTALL)
_STRING_SPLIT_RE = re.compile(rf"({_STRING})")
_SPACE_RE = re.compile(r"\s+")
_PUNCT_SPACE_RE = re.compile(r"\s*([{};,>])\s*")
_COLON_SPACE_RE = re.compile(r":\s+")


def bundle_css(chunks: Iterable[tuple[str, str]], params: CssParams) -> str:
    """
    Join (relative path, normalized text) chunks into one stylesheet.

    Only the first `@charset` rule is kept and moved to the very top; a
    charset rule is only valid as the first bytes of a stylesheet.
    """
    charset: str | None = None
    parts: list[str] = []
    for rel, text in chunks:
        match = _CHARSET_RE.match(text)
        if match:
            if charset is None:
                charset = match.group(0)
            text = text[match.end() :]

        chunk = minify_css(text) if params.minify else trim_chunk(text)
        if not chunk:
            continue
        if params.source_comments:
            parts.append(f"/* {rel} */\n")
        parts.append(chunk + "\n")

    header = f"{charset}\n" if charset else ""
    return header + format_banner(params.banner) + "".join(parts)


def minify_css(text: str) -> str:
    """Drop regular comments (keeping `/*! ... */`) and collapse whitespace."""
    without_comments = _COMMENT_RE.sub(_keep_strings_and_bang_comments, text)
    pieces = _STRING_SPLIT_RE.split(without_comments)
    for index in range(0, len(pieces), 2):
        collapsed = _SPACE_RE.sub(" ", pieces[index])
        collapsed = _PUNCT_SPACE_RE.sub(r"\1", collapsed)
        collapsed = _COLON_SPACE_RE.sub(":", collapsed)
        pieces[index] = collapsed.replace(";}", "}")
    return "".join(pieces).strip()


def _keep_strings_and_bang_comments(match: re.Match[str]) -> str:
    if match.group(1) is not None:
        return match.group(1)
    comment = match.group(2)
    return comment if comment.startswith("/*!") else ""
