"""Runtime helpers for the build runner."""

from reducer.runtime.inputs import ensure_inputs_exist, expand_inputs, read_input
from reducer.runtime.outputs import prepare_output_dir, write_output

__all__ = [
    "ensure_inputs_exist",
    "expand_inputs",
    "read_input",
    "prepare_output_dir",
    "write_output",
]
