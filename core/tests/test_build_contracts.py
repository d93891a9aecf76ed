import logging
from pathlib import Path

import pytest

from reducer.api import infer_transform_key, validate_spec
from reducer.contracts import (
    BuildContext,
    BuildResult,
    BuildSpec,
    ConfigurableTransform,
    TargetResult,
    TargetSpec,
    Transform,
    TransformInfo,
)
from reducer.errors import ConfigError


def _target(root: Path, name: str = "app", output: str = "app.js") -> TargetSpec:
    return TargetSpec(
        name=name,
        transform="js",
        inputs=(root / "src" / "a.js",),
        output=root / "build" / output,
        basedir=root / "src",
    )


def test_build_context_construction(tmp_path):
    spec = BuildSpec(basedir=tmp_path / "src", output_dir=tmp_path / "build", targets=())
    logger = logging.getLogger("test.build_context")

    context = BuildContext(
        build_id="b-123",
        spec=spec,
        output_dir=tmp_path / "build",
        logger=logger,
    )

    assert context.build_id == "b-123"
    assert context.spec is spec
    assert context.output_dir == tmp_path / "build"
    assert context.logger is logger


def test_transform_protocol_accepts_build_context():
    class ExampleTransform:
        @property
        def info(self) -> TransformInfo:
            return TransformInfo(key="example", name="Example")

        def run(self, target: TargetSpec, *, context: BuildContext) -> bytes:
            return target.name.encode("utf-8")

    transform = ExampleTransform()

    assert isinstance(transform, Transform)
    assert not isinstance(transform, ConfigurableTransform)


def test_target_spec_relative_input(tmp_path):
    target = _target(tmp_path)

    assert target.relative_input(tmp_path / "src" / "lib" / "x.js") == "lib/x.js"
    assert target.relative_input(Path("/elsewhere/y.js")) == "/elsewhere/y.js"


def test_build_result_lookup(tmp_path):
    result = BuildResult(
        build_id="b-1",
        started_at_utc="1970-01-01T00:00:00+00:00",
        ended_at_utc="1970-01-01T00:00:00+00:00",
        duration_s=0.0,
        output_dir=tmp_path,
        targets=(
            TargetResult(
                name="app",
                transform="js",
                output=tmp_path / "app.js",
                inputs=(),
                size=0,
                sha256="0" * 64,
            ),
        ),
    )

    assert result.outputs() == [tmp_path / "app.js"]
    assert result.target("app").transform == "js"
    with pytest.raises(KeyError):
        result.target("missing")


def test_validate_spec_reports_every_problem(tmp_path):
    spec = BuildSpec(
        basedir=tmp_path / "src",
        output_dir=tmp_path / "build",
        targets=(_target(tmp_path), _target(tmp_path, name="dup")),
        jobs=0,
    )

    with pytest.raises(ConfigError, match="jobs must be >= 1; target outputs must be unique"):
        validate_spec(spec)


def test_validate_spec_rejects_outputs_outside_output_dir(tmp_path):
    escaped = TargetSpec(
        name="escaped",
        transform="js",
        inputs=(tmp_path / "src" / "a.js",),
        output=tmp_path / "elsewhere.js",
        basedir=tmp_path / "src",
    )
    spec = BuildSpec(basedir=tmp_path / "src", output_dir=tmp_path / "build", targets=(escaped,))

    with pytest.raises(ConfigError, match="writes outside output_dir"):
        validate_spec(spec)


def test_validate_spec_requires_targets(tmp_path):
    spec = BuildSpec(basedir=tmp_path, output_dir=tmp_path / "build", targets=())

    with pytest.raises(ConfigError, match="at least one target"):
        validate_spec(spec)


@pytest.mark.parametrize(
    ("output", "key"),
    [
        ("bundle.css", "css"),
        ("app.JS", "js"),
        ("module.mjs", "js"),
        ("notes.txt", "concat"),
        ("LICENSE", "concat"),
    ],
)
def test_infer_transform_key_from_output_suffix(output, key):
    assert infer_transform_key(output) == key
