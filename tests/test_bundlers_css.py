from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from bundlers.css import CssTransform
from bundlers.css.bundle import bundle_css, minify_css
from bundlers.css.config import CssParams
from reducer.api import reduce
from reducer.errors import ConfigError, TransformError


def _build(tmp_path: Path, files: dict[str, bytes], **params: Any) -> bytes:
    for name, payload in files.items():
        (tmp_path / name).write_bytes(payload)
    config = {"targets": [{"input": list(files), "output": "bundle.css", "params": params}]}
    reduce(config, base_dir=tmp_path)
    return (tmp_path / "build" / "bundle.css").read_bytes()


def test_css_plugin_info() -> None:
    info = CssTransform().info
    assert info.key == "css"
    assert info.description


def test_charset_is_hoisted_once_to_the_top() -> None:
    chunks = [
        ("a.css", ".a{}\n"),
        ("b.css", '@charset "utf-8";\n.b{}\n'),
        ("c.css", "@charset 'latin1';\n.c{}\n"),
    ]

    assert bundle_css(chunks, CssParams()) == '@charset "utf-8";\n.a{}\n.b{}\n.c{}\n'


def test_charset_only_chunk_is_dropped() -> None:
    chunks = [("charset.css", '@charset "utf-8";\n'), ("a.css", ".a{}")]

    assert bundle_css(chunks, CssParams()) == '@charset "utf-8";\n.a{}\n'


def test_source_comments_and_banner() -> None:
    params = CssParams(banner="site v1", source_comments=True)
    chunks = [("base/a.css", ".a{}\n"), ("b.css", "\n\n")]

    assert bundle_css(chunks, params) == "/*! site v1 */\n/* base/a.css */\n.a{}\n"


def test_minify_collapses_whitespace_and_drops_comments() -> None:
    source = ".a {\n  color: red;\n  margin: 0 auto;\n}\n/* note */\n.b > .c , .d { top: 0; }\n"

    assert minify_css(source) == ".a{color:red;margin:0 auto}.b>.c,.d{top:0}"


def test_minify_keeps_strings_and_bang_comments() -> None:
    source = '/*! (c) acme */\n.q::before { content: "a  /* b */ ;"; }\n'

    assert minify_css(source) == '/*! (c) acme */ .q::before{content:"a  /* b */ ;"}'


def test_bom_and_crlf_are_normalized(tmp_path: Path) -> None:
    output = _build(
        tmp_path,
        {"a.css": b"\xef\xbb\xbf.a {\r\n  color: red;\r\n}\r\n", "b.css": b".b{}\r"},
    )

    assert output == b".a {\n  color: red;\n}\n.b{}\n"


def test_minified_build_through_default_registry(tmp_path: Path) -> None:
    output = _build(
        tmp_path,
        {"a.css": b'@charset "utf-8";\n.a { color: red; }\n', "b.css": b".b { color: blue; }\n"},
        minify=True,
    )

    assert output == b'@charset "utf-8";\n.a{color:red}\n.b{color:blue}\n'


def test_undecodable_input_is_transform_error(tmp_path: Path) -> None:
    with pytest.raises(TransformError, match="a.css is not valid ascii"):
        _build(tmp_path, {"a.css": b".a{content:'\xe9'}"}, encoding="ascii")


@pytest.mark.parametrize(
    "params",
    [
        {"minfy": True},
        {"encoding": "no-such-codec"},
        {"banner": "evil */ .x{}"},
    ],
)
def test_invalid_params_are_config_errors(tmp_path: Path, params: dict[str, Any]) -> None:
    with pytest.raises(ConfigError, match="invalid params for 'css'"):
        _build(tmp_path, {"a.css": b".a{}"}, **params)


def test_rebuild_on_default_layout_with_recursive_glob(tmp_path: Path) -> None:
    (tmp_path / "a.css").write_text(".a{}\n", encoding="utf-8")
    (tmp_path / "b.css").write_text(".b{}\n", encoding="utf-8")
    config = {"targets": [{"input": "**/*.css", "output": "bundle.css"}]}

    reduce(config, base_dir=tmp_path)
    result = reduce(config, base_dir=tmp_path)

    assert (tmp_path / "build" / "bundle.css").read_bytes() == b".a{}\n.b{}\n"
    assert [path.name for path in result.target("bundle.css").inputs] == ["a.css", "b.css"]
