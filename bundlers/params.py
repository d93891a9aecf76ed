from __future__ import annotations

from collections.abc import Mapping
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from reducer.configuration import deep_merge

_M = TypeVar("_M", bound=BaseModel)


def validate_model_params(
    model_type: type[BaseModel],
    params: Mapping[str, Any] | None,
    *,
    strict: bool = True,
) -> dict[str, Any]:
    """
    Validate transform params against `model_type` and return normalized values.

    Non-strict mode validates the known keys and passes unknown keys through.
    """
    raw_params = dict(params or {})
    validated = parse_model_params(model_type, raw_params, strict=strict)
    if strict:
        return validated.model_dump(mode="python")
    return deep_merge(raw_params, validated.model_dump(mode="python"))


def parse_model_params(
    model_type: type[_M],
    params: Mapping[str, Any] | None,
    *,
    strict: bool = True,
) -> _M:
    raw_params = dict(params or {})
    if not strict:
        raw_params = {
            key: value for key, value in raw_params.items() if key in model_type.model_fields
        }
    try:
        return model_type.model_validate(raw_params)
    except ValidationError as exc:
        # ValidationError is a ValueError; flatten it to one readable line.
        details = [
            f"{'.'.join(str(part) for part in error['loc']) or 'params'}: {error['msg']}"
            for error in exc.errors(include_url=False)
        ]
        raise ValueError("; ".join(details)) from exc
