from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from reducer.contracts.build_contracts.build_spec import BuildSpec


@dataclass(frozen=True, slots=True)
class BuildContext:
    """
    Core-provided runtime context for transform execution.

    Keep this stable: transforms should only depend on these fields.
    """

    build_id: str
    spec: BuildSpec
    output_dir: Path
    logger: logging.Logger
