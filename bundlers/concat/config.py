from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict

from bundlers.params import parse_model_params, validate_model_params


class ConcatParams(BaseModel):
    model_config = ConfigDict(extra="forbid")

    separator: str = ""
    trailing_newline: bool = False


def default_params() -> dict[str, Any]:
    return ConcatParams().model_dump(mode="python")


def validate_params(params: Mapping[str, Any] | None, *, strict: bool = True) -> dict[str, Any]:
    return validate_model_params(ConcatParams, params, strict=strict)


def parse_config(params: Mapping[str, Any] | None, *, strict: bool = True) -> ConcatParams:
    return parse_model_params(ConcatParams, params, strict=strict)
