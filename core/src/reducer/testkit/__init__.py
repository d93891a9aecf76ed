from .dummies import DummyTransform, FailingTransform
from .harness import HarnessRun, clear_directory, run_and_compare

__all__ = [
    "DummyTransform",
    "FailingTransform",
    "HarnessRun",
    "clear_directory",
    "run_and_compare",
]
