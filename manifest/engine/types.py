"""Public API types for workflow definitions.

Workflow authors build Steps, Branches and Merges and collect them
in a Workflow. The same Workflow value is the accumulator the
executor threads through a run.
"""
from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field, replace

from returns.result import Result, Success

from manifest.errors import (
    InvalidOperationError,
    NotAStepError,
    NotCallableError,
)
from manifest.types import (
    NoRollback,
    Operation,
    ResultMap,
    RollbackEntry,
    RollbackFunction,
    is_operation,
)

WorkFunction = Callable[[ResultMap], "Result[object, object]"]
ParserFunction = Callable[[object], "Result[object, object]"]
ConditionalFunction = Callable[[ResultMap], object]
MergeFunction = Callable[[ResultMap], "Workflow"]


def default_work(previous: ResultMap) -> Result[NoRollback, object]:
    return Success(NoRollback({}))


def default_parser(value: object) -> Result[object, object]:
    """Use the work value itself as the rollback identifier."""
    return Success(value)


def noop_rollback(
    identifier: object,
    previous: ResultMap,
) -> Result[None, object]:
    """Rollback that always succeeds and does nothing."""
    return Success(None)


def default_merge(previous: ResultMap) -> Workflow:
    return Workflow()


def _require_callable(key: str, value: object) -> None:
    if not callable(value):
        raise NotCallableError(key, value)


@dataclass(frozen=True)
class Step:
    """A unit of work plus how to undo it.

    work receives the results so far. parser turns work's value
    into the identifier the rollback receives, together with the
    results as they stood before this step ran.

    Raises InvalidOperationError or NotCallableError on construction.
    """

    operation: Operation
    work: WorkFunction = default_work
    parser: ParserFunction = default_parser
    rollback: RollbackFunction = noop_rollback

    def __post_init__(self) -> None:
        if not is_operation(self.operation):
            raise InvalidOperationError(self.operation)
        _require_callable("work", self.work)
        _require_callable("rollback", self.rollback)
        _require_callable("parser", self.parser)


@dataclass(frozen=True)
class Branch:
    """Run success when conditional is truthy, failure otherwise.

    Superseded by Merge, which can build any shape of follow-up work.
    """

    conditional: ConditionalFunction
    success: Step
    failure: Step

    def __post_init__(self) -> None:
        _require_callable("conditional", self.conditional)
        for key in ("success", "failure"):
            value = getattr(self, key)
            if not isinstance(value, Step):
                raise NotAStepError(key, value)


@dataclass(frozen=True)
class Merge:
    """Splice a workflow built from the results so far."""

    merge: MergeFunction = default_merge

    def __post_init__(self) -> None:
        _require_callable("merge", self.merge)


Instruction = Step | Branch | Merge


@dataclass(frozen=True)
class Workflow:
    """Declared instructions plus the state of a run over them.

    Frozen dataclass: container fields are shallow-frozen and
    callers MUST NOT mutate them in place. The helper methods
    return a NEW workflow.
    """

    instructions: tuple[Instruction, ...] = ()
    result: ResultMap = field(default_factory=dict)
    rollback_stack: tuple[RollbackEntry, ...] = ()
    halted: bool = False
    failed_operation: Operation | None = None
    failure_reason: object = None

    def with_instruction(self, instruction: Instruction) -> Workflow:
        """Return new workflow with instruction appended."""
        return replace(
            self,
            instructions=(*self.instructions, instruction),
        )

    def with_result(self, operation: Operation, value: object) -> Workflow:
        """Return new workflow with value recorded under operation."""
        return replace(self, result={**self.result, operation: value})

    def with_rollback(self, entry: RollbackEntry) -> Workflow:
        """Return new workflow with entry pushed on the rollback stack."""
        return replace(
            self,
            rollback_stack=(*self.rollback_stack, entry),
        )

    def halt(self, operation: Operation, reason: object) -> Workflow:
        """Return new workflow stopped at operation."""
        return replace(
            self,
            halted=True,
            failed_operation=operation,
            failure_reason=reason,
        )
