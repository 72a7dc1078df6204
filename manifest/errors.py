"""Error types for the manifest engine.

Two channels: StepFailure values travel through Failure(...) when a
step or compensation reports failure; ManifestError subclasses are
raised for caller programming errors and are never folded into a
workflow's own failure.
"""
from __future__ import annotations

from dataclasses import dataclass, field

_MAX_RESULTS_LEN = 500


@dataclass(frozen=True)
class StepFailure:
    """Structured report of the operation that stopped a run.

    str() renders the one-line summary the demo CLI prints and the
    executor logs when a rollback fails.
    """

    operation: object
    reason: object
    results: dict[object, object] = field(default_factory=dict)

    def __str__(self) -> str:
        completed = repr(self.results)
        if len(completed) > _MAX_RESULTS_LEN:
            completed = completed[: _MAX_RESULTS_LEN - 3] + "..."
        return (
            f"failed at {_key(self.operation)}"
            f" ({self.reason!r}), completed={completed}"
        )


def _key(operation: object) -> str:
    value = getattr(operation, "value", operation)
    return str(value)


class ManifestError(Exception):
    """Base class for contract violations raised by the engine."""


class InvalidOperationError(ManifestError):
    """Operation identifier is not a non-empty str or an Enum member."""

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(
            "operation must be a non-empty string or an Enum member,"
            f" received: {value!r}",
        )


class NotCallableError(ManifestError):
    """A field that must hold a callable holds something else."""

    def __init__(self, key: str, value: object) -> None:
        self.key = key
        self.value = value
        super().__init__(
            f"{key!r} must have a callable for its value,"
            f" received: {value!r}",
        )


class NotAStepError(ManifestError):
    """Value given where a Step (or any instruction) was expected."""

    def __init__(self, key: str, value: object) -> None:
        self.key = key
        self.value = value
        super().__init__(
            f"{key!r} must be a workflow instruction,"
            f" received: {value!r}",
        )


_EXPECTED_SHAPES = {
    "work": (
        "Success(value), Success(NoRollback(value))"
        " or Failure(reason)"
    ),
    "merge": "a Workflow",
    "instruction": "a Step, Branch or Merge",
}
_DEFAULT_SHAPES = "Success(value) or Failure(reason)"


class MalformedReturnError(ManifestError):
    """A caller function returned something outside its contract."""

    def __init__(self, stage: str, value: object) -> None:
        self.stage = stage
        self.value = value
        expected = _EXPECTED_SHAPES.get(stage, _DEFAULT_SHAPES)
        super().__init__(
            f"{stage} was expecting {expected},"
            f" but got {value!r}",
        )


class DuplicateOperationError(ManifestError):
    """Operation identifier used by more than one step in a workflow."""

    def __init__(self, operation: object) -> None:
        self.operation = operation
        super().__init__(f"Operation ({_key(operation)}) already exists.")
