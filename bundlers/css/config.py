from __future__ import annotations

import codecs
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from bundlers.params import parse_model_params, validate_model_params


class CssParams(BaseModel):
    model_config = ConfigDict(extra="forbid")

    encoding: str = "utf-8"
    banner: str | None = None
    source_comments: bool = False
    minify: bool = False

    @field_validator("encoding")
    @classmethod
    def _validate_encoding(cls, value: str) -> str:
        try:
            codecs.lookup(value)
        except LookupError as exc:
            raise ValueError(f"unknown encoding: {value}") from exc
        return value

    @field_validator("banner")
    @classmethod
    def _validate_banner(cls, value: str | None) -> str | None:
        if value is not None and "*/" in value:
            raise ValueError("banner must not contain '*/'")
        return value


def default_params() -> dict[str, Any]:
    return CssParams().model_dump(mode="python")


def validate_params(params: Mapping[str, Any] | None, *, strict: bool = True) -> dict[str, Any]:
    return validate_model_params(CssParams, params, strict=strict)


def parse_config(params: Mapping[str, Any] | None, *, strict: bool = True) -> CssParams:
    return parse_model_params(CssParams, params, strict=strict)
