from __future__ import annotations

from pathlib import PurePosixPath
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class TargetConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str | None = None
    input: list[str] = Field(min_length=1)
    output: str = Field(min_length=1)
    transform: str | None = None
    params: dict[str, Any] = Field(default_factory=dict)

    @field_validator("input", mode="before")
    @classmethod
    def _coerce_input_list(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [value]
        return value

    @field_validator("input")
    @classmethod
    def _validate_input_entries(cls, value: list[str]) -> list[str]:
        for entry in value:
            if not entry.strip():
                raise ValueError("input entries must be non-empty strings")
        return value

    @field_validator("output")
    @classmethod
    def _validate_output_path(cls, value: str) -> str:
        return _normalize_output_path(value, field="output")

    @field_validator("params", mode="before")
    @classmethod
    def _coerce_params_dict(cls, value: Any) -> dict[str, Any]:
        if value is None:
            return {}
        if isinstance(value, dict):
            return value
        raise ValueError("params must be a mapping")

    def target_name(self) -> str:
        return self.name or self.output


class BuildConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    basedir: str = "."
    output_dir: str = Field(default="build", min_length=1)
    clean: bool = True
    jobs: int = Field(default=1, ge=1)
    manifest: str | None = None
    targets: list[TargetConfig] = Field(min_length=1)

    @field_validator("manifest")
    @classmethod
    def _validate_manifest_path(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return _normalize_output_path(value, field="manifest")

    @model_validator(mode="after")
    def _validate_unique_targets(self) -> BuildConfig:
        names: set[str] = set()
        outputs: set[str] = set()
        for target in self.targets:
            name = target.target_name()
            if name in names:
                raise ValueError(f"duplicate target name '{name}'")
            if target.output in outputs:
                raise ValueError(f"duplicate target output '{target.output}'")
            names.add(name)
            outputs.add(target.output)
        if self.manifest is not None and self.manifest in outputs:
            raise ValueError(f"manifest '{self.manifest}' collides with a target output")
        return self


def _normalize_output_path(value: str, *, field: str) -> str:
    path = PurePosixPath(value.replace("\\", "/"))
    if path.is_absolute():
        raise ValueError(f"{field} must be relative to output_dir")
    if ".." in path.parts:
        raise ValueError(f"{field} must not escape output_dir")
    if not path.parts:
        raise ValueError(f"{field} must name a file")
    return path.as_posix()
