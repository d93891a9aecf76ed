from __future__ import annotations

import hashlib
import json
import logging
from collections.abc import Callable, Mapping
from concurrent.futures import ThreadPoolExecutor
from datetime import UTC, datetime
from pathlib import Path
from typing import Any, TypeVar

from reducer.configuration import (
    apply_dotpath_overrides,
    build_id_from_config,
    coerce_mapping,
    deep_merge,
    load_build_config,
    load_build_config_dict,
    load_yaml,
    resolve_env_vars,
)
from reducer.contracts import (
    BuildConfig,
    BuildContext,
    BuildResult,
    BuildSpec,
    ConfigurableTransform,
    TargetConfig,
    TargetResult,
    TargetSpec,
    Transform,
    TransformNotFoundError,
    TransformRegistry,
)
from reducer.errors import ConfigError, InputNotFoundError, ReduceError, TransformError
from reducer.runtime.inputs import ensure_inputs_exist, expand_inputs
from reducer.runtime.outputs import prepare_output_dir, write_output

logger = logging.getLogger("reducer.build")

_SUFFIX_TRANSFORMS = {".css": "css", ".js": "js", ".mjs": "js"}
_DEFAULT_TRANSFORM = "concat"

_T = TypeVar("_T")
_R = TypeVar("_R")

ConfigInput = str | Path | Mapping[str, Any] | BuildConfig


def reduce(
    config: ConfigInput,
    *,
    registry: TransformRegistry | None = None,
    base_dir: str | Path | None = None,
) -> BuildResult:
    """
    Build every target declared by `config` and return once all outputs are on disk.

    `config` may be a path to a YAML/JSON file, a mapping or a BuildConfig.
    Relative paths resolve against the config file's directory, or against
    `base_dir` (default: the working directory) for in-memory configs.
    """
    registry = registry or _default_registry()
    if isinstance(config, (str, Path)):
        build_config = load_build_config(config)
        root = Path(config).resolve().parent
    else:
        build_config = (
            config if isinstance(config, BuildConfig) else load_build_config_dict(config)
        )
        root = Path(base_dir).resolve() if base_dir is not None else Path.cwd()

    spec = resolve_build_spec(build_config, base_dir=root, registry=registry)
    return run_build(spec, registry=registry)


def run_from_config(
    path: str | Path,
    *,
    registry: TransformRegistry | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> BuildResult:
    registry = registry or _default_registry()
    payload = resolve_env_vars(load_yaml(path))
    if overrides:
        payload = apply_dotpath_overrides(payload, overrides)
    build_config = load_build_config_dict(payload)
    spec = resolve_build_spec(
        build_config,
        base_dir=Path(path).resolve().parent,
        registry=registry,
    )
    return run_build(spec, registry=registry)


def resolve_build_spec(
    config: BuildConfig,
    *,
    base_dir: Path,
    registry: TransformRegistry,
) -> BuildSpec:
    """
    Turn a validated BuildConfig into an immutable BuildSpec.

    Every input is expanded and checked here, before anything touches the
    output directory.
    """
    basedir = _resolve_dir(base_dir, config.basedir)
    output_dir = _resolve_dir(base_dir, config.output_dir)
    if not basedir.is_dir():
        raise InputNotFoundError(config.basedir, basedir=base_dir)
    if output_dir == basedir or output_dir in basedir.parents:
        raise ConfigError(f"output_dir {output_dir} must not contain basedir {basedir}")

    targets: list[TargetSpec] = []
    resolved_targets: list[dict[str, Any]] = []
    for target_config in config.targets:
        target = _resolve_target(
            target_config,
            basedir=basedir,
            output_dir=output_dir,
            registry=registry,
        )
        targets.append(target)
        resolved_targets.append(
            {
                "name": target.name,
                "transform": target.transform,
                "input": list(target_config.input),
                "output": target_config.output,
                "params": dict(target.params),
            }
        )

    resolved_payload = {
        "clean": config.clean,
        "manifest": config.manifest,
        "targets": resolved_targets,
    }

    return BuildSpec(
        basedir=basedir,
        output_dir=output_dir,
        targets=tuple(targets),
        clean=config.clean,
        jobs=config.jobs,
        manifest=output_dir / config.manifest if config.manifest else None,
        resolved_config=resolved_payload,
    )


def validate_spec(spec: BuildSpec) -> None:
    errors: list[str] = []

    if not spec.targets:
        errors.append("at least one target is required")
    if spec.jobs < 1:
        errors.append("jobs must be >= 1")

    outputs = [target.output for target in spec.targets]
    if len(set(outputs)) != len(outputs):
        errors.append("target outputs must be unique")
    for target in spec.targets:
        if spec.output_dir not in target.output.parents:
            errors.append(f"target '{target.name}' writes outside output_dir")
        if not target.inputs:
            errors.append(f"target '{target.name}' has no inputs")

    if errors:
        raise ConfigError("; ".join(errors))


def run_build(spec: BuildSpec, *, registry: TransformRegistry) -> BuildResult:
    """
    Run the build lifecycle for a resolved spec.

    Phases are strictly ordered: inputs checked, output dir cleaned, every
    payload computed, every payload written, manifest written. A failure in
    any phase is raised after in-flight work settles; nothing is written
    once a payload fails to compute.
    """
    validate_spec(spec)
    build_id = build_id_from_config(spec.resolved_config)
    build_logger = logging.getLogger(f"reducer.build.{build_id}")
    start = datetime.now(UTC)

    for target in spec.targets:
        ensure_inputs_exist(target.inputs, target=target.name)

    transforms = {
        target.name: _lookup_transform(registry, target.transform) for target in spec.targets
    }

    logger.info(
        "Starting build %s (%s): %d target(s) -> %s",
        build_id,
        spec.short_name(),
        len(spec.targets),
        spec.output_dir,
    )
    prepare_output_dir(spec.output_dir, clean=spec.clean)
    context = BuildContext(
        build_id=build_id,
        spec=spec,
        output_dir=spec.output_dir,
        logger=build_logger,
    )

    def compute(target: TargetSpec) -> bytes:
        ensure_inputs_exist(target.inputs, target=target.name)
        build_logger.debug(
            "Running transform %s for %s (%d input(s))",
            target.transform,
            target.name,
            len(target.inputs),
        )
        try:
            payload = transforms[target.name].run(target, context=context)
        except ReduceError:
            raise
        except Exception as exc:
            raise TransformError(target.name, target.transform, str(exc)) from exc
        if not isinstance(payload, (bytes, bytearray)):
            raise TransformError(
                target.name,
                target.transform,
                f"expected bytes, got {type(payload).__name__}",
            )
        return bytes(payload)

    payloads = _map_ordered(compute, spec.targets, jobs=spec.jobs)

    def write(item: tuple[TargetSpec, bytes]) -> TargetResult:
        target, payload = item
        write_output(target.output, payload)
        build_logger.debug("Wrote %s (%d bytes)", target.output, len(payload))
        return TargetResult(
            name=target.name,
            transform=target.transform,
            output=target.output,
            inputs=tuple(target.inputs),
            size=len(payload),
            sha256=hashlib.sha256(payload).hexdigest(),
        )

    pairs = list(zip(spec.targets, payloads, strict=True))
    results = _map_ordered(write, pairs, jobs=spec.jobs)

    manifest_path = None
    if spec.manifest is not None:
        manifest_path = _write_manifest_best_effort(
            spec.manifest, spec=spec, build_id=build_id, results=results
        )

    end = datetime.now(UTC)
    logger.info(
        "Finished build %s: %d output(s) in %.3fs",
        build_id,
        len(results),
        (end - start).total_seconds(),
    )
    return BuildResult(
        build_id=build_id,
        started_at_utc=start.isoformat(),
        ended_at_utc=end.isoformat(),
        duration_s=(end - start).total_seconds(),
        output_dir=spec.output_dir,
        targets=tuple(results),
        manifest_path=manifest_path,
    )


def _resolve_target(
    target_config: TargetConfig,
    *,
    basedir: Path,
    output_dir: Path,
    registry: TransformRegistry,
) -> TargetSpec:
    name = target_config.target_name()
    transform_key = target_config.transform or infer_transform_key(target_config.output)
    transform = _lookup_transform(registry, transform_key)

    params: dict[str, Any] = dict(target_config.params)
    if isinstance(transform, ConfigurableTransform):
        defaults = coerce_mapping(transform.default_params())
        merged = deep_merge(defaults, params)
        try:
            params = coerce_mapping(transform.validate_params(merged, strict=True))
        except ValueError as exc:
            raise ConfigError(
                f"target '{name}': invalid params for '{transform_key}': {exc}"
            ) from exc
    elif params:
        raise ConfigError(f"target '{name}': transform '{transform_key}' does not accept params")

    inputs = expand_inputs(
        target_config.input,
        basedir=basedir,
        target=name,
        exclude_dir=output_dir,
    )
    output = output_dir / target_config.output
    for path in inputs:
        if output_dir in path.parents:
            raise ConfigError(f"target '{name}': input {path} lives inside output_dir")

    return TargetSpec(
        name=name,
        transform=transform_key,
        inputs=tuple(inputs),
        output=output,
        basedir=basedir,
        params=params,
    )


def infer_transform_key(output: str) -> str:
    return _SUFFIX_TRANSFORMS.get(Path(output).suffix.lower(), _DEFAULT_TRANSFORM)


def _lookup_transform(registry: TransformRegistry, key: str) -> Transform:
    try:
        return registry.get(key)
    except TransformNotFoundError as exc:
        raise ConfigError(f"Unknown transform '{key}'") from exc


def _resolve_dir(root: Path, value: str) -> Path:
    path = Path(value).expanduser()
    if not path.is_absolute():
        path = root / path
    return path.resolve()


def _map_ordered(
    func: Callable[[_T], _R],
    items: list[_T] | tuple[_T, ...],
    *,
    jobs: int,
) -> list[_R]:
    """Apply `func` to every item, in a pool when jobs > 1; results keep input order."""
    if jobs <= 1 or len(items) <= 1:
        return [func(item) for item in items]

    with ThreadPoolExecutor(max_workers=min(jobs, len(items))) as executor:
        futures = [executor.submit(func, item) for item in items]
    # Leaving the executor joins every future before results are read.
    errors = [future.exception() for future in futures]
    for error in errors:
        if error is not None:
            raise error
    return [future.result() for future in futures]


def _write_manifest_best_effort(
    manifest_path: Path,
    *,
    spec: BuildSpec,
    build_id: str,
    results: list[TargetResult],
) -> Path | None:
    manifest = {
        "build_id": build_id,
        "targets": [
            {
                "name": result.name,
                "transform": result.transform,
                "output": result.output.relative_to(spec.output_dir).as_posix(),
                "inputs": [target.relative_input(path) for path in result.inputs],
                "size": result.size,
                "sha256": result.sha256,
            }
            for result, target in zip(results, spec.targets, strict=True)
        ],
    }
    try:
        payload = json.dumps(manifest, indent=2, sort_keys=True) + "\n"
        return write_output(manifest_path, payload.encode("utf-8"))
    except Exception:
        logger.warning("Failed to write build manifest for %s", build_id, exc_info=True)
        return None


def _default_registry() -> TransformRegistry:
    from bundlers import default_registry

    return default_registry()
