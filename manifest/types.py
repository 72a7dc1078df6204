"""Shared type definitions for the manifest engine."""
from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import TypeAlias

from returns.result import Result, Success

Operation: TypeAlias = str | Enum
ResultMap: TypeAlias = dict[Operation, object]

RollbackFunction = Callable[
    [object, ResultMap],
    "Result[object, object]",
]


def is_operation(value: object) -> bool:
    """Return True when value can name a step."""
    if isinstance(value, Enum):
        return True
    return isinstance(value, str) and bool(value.strip())


@dataclass(frozen=True)
class NoRollback:
    """Work value committed without pushing a compensation."""

    value: object


def no_rollback(value: object) -> Result[NoRollback, object]:
    """Wrap value as a successful work return that skips rollback."""
    return Success(NoRollback(value))


@dataclass(frozen=True)
class RollbackEntry:
    """A compensation recorded for one committed step.

    snapshot is the result map as it stood before the step
    committed, so the rollback never sees later steps.
    """

    operation: Operation
    rollback: RollbackFunction
    identifier: object
    snapshot: ResultMap
