"""Engine executor -- forward execution and rollback.

perform() dispatches instructions in declared order over a work
queue and halts at the first failure. rollback() unwinds the
compensations recorded by perform() in reverse commit order.
Caller functions report through returns containers; anything
else raises MalformedReturnError instead of failing the workflow.
"""
from __future__ import annotations

import logging
from collections import deque
from typing import TYPE_CHECKING

from returns.io import IOFailure, IOSuccess
from returns.result import Failure, Result, Success
from returns.unsafe import unsafe_perform_io

from manifest.engine.types import Branch, Merge, Step, Workflow
from manifest.errors import (
    DuplicateOperationError,
    MalformedReturnError,
    StepFailure,
)
from manifest.types import NoRollback, RollbackEntry

if TYPE_CHECKING:
    from manifest.engine.types import Instruction
    from manifest.types import ResultMap

logger = logging.getLogger(__name__)


def _as_result(value: object, stage: str) -> Result[object, object]:
    """Normalize a caller return to a plain Result.

    IOSuccess/IOFailure are unwrapped so I/O-performing steps can
    return IOResult directly. Raises MalformedReturnError otherwise.
    """
    if isinstance(value, (Success, Failure)):
        return value
    if isinstance(value, IOSuccess):
        return Success(unsafe_perform_io(value.unwrap()))
    if isinstance(value, IOFailure):
        return Failure(unsafe_perform_io(value.failure()))
    raise MalformedReturnError(stage, value)


def _commit(step: Step, value: object, workflow: Workflow) -> Workflow:
    """Record a successful work value and its compensation."""
    if isinstance(value, NoRollback):
        return workflow.with_result(step.operation, value.value)

    parsed = _as_result(step.parser(value), "parser")
    if isinstance(parsed, Failure):
        return _halt(workflow, step, parsed.failure(), "parser")

    entry = RollbackEntry(
        operation=step.operation,
        rollback=step.rollback,
        identifier=parsed.unwrap(),
        snapshot=workflow.result,
    )
    return workflow.with_rollback(entry).with_result(step.operation, value)


def _halt(
    workflow: Workflow,
    step: Step,
    reason: object,
    stage: str,
) -> Workflow:
    logger.info(
        "Halting at %r: %s failed with %r",
        step.operation,
        stage,
        reason,
    )
    return workflow.halt(step.operation, reason)


def run_step(step: Step, workflow: Workflow) -> Workflow:
    """Run a single step against the workflow's results so far.

    Raises DuplicateOperationError if the step's operation has
    already committed a result in this run.
    """
    if step.operation in workflow.result:
        raise DuplicateOperationError(step.operation)

    logger.debug("Performing step %r", step.operation)
    outcome = _as_result(step.work(dict(workflow.result)), "work")
    if isinstance(outcome, Failure):
        return _halt(workflow, step, outcome.failure(), "work")
    return _commit(step, outcome.unwrap(), workflow)


def _expand(instruction: Instruction, workflow: Workflow) -> list[Instruction]:
    """Replace a Branch or Merge with the instructions it stands for."""
    if isinstance(instruction, Merge):
        inner = instruction.merge(dict(workflow.result))
        if not isinstance(inner, Workflow):
            raise MalformedReturnError("merge", inner)
        logger.debug(
            "Merging %d instruction(s)",
            len(inner.instructions),
        )
        return list(inner.instructions)

    chosen = (
        instruction.success
        if instruction.conditional(dict(workflow.result))
        else instruction.failure
    )
    logger.debug("Branch selected %r", chosen.operation)
    return [chosen]


def perform(workflow: Workflow) -> Workflow:
    """Perform the workflow's instructions in declared order.

    Three paths a step can take:

    1. work returns Success(value): parser derives an identifier
       and the rollback is pushed on the stack.
    2. work returns Success(NoRollback(value)): no rollback pushed.
    3. work (or parser) returns Failure(reason): the workflow halts
       and no further instruction runs.

    Merge and Branch instructions are expanded in place, so their
    steps share this workflow's results and rollback stack.
    Returns the terminal workflow; use digest() to inspect it.
    """
    current = workflow
    pending: deque[Instruction] = deque(workflow.instructions)

    while pending and not current.halted:
        instruction = pending.popleft()
        if isinstance(instruction, Step):
            current = run_step(instruction, current)
            continue
        if isinstance(instruction, (Branch, Merge)):
            pending.extendleft(reversed(_expand(instruction, current)))
            continue
        raise MalformedReturnError("instruction", instruction)

    return current


def digest(workflow: Workflow) -> Result[ResultMap, StepFailure]:
    """Report on the results of perform().

    Success with every step's value, or Failure naming the step
    that halted the run, its reason, and the results up to it.
    """
    if workflow.halted:
        return Failure(
            StepFailure(
                operation=workflow.failed_operation,
                reason=workflow.failure_reason,
                results=dict(workflow.result),
            ),
        )
    return Success(dict(workflow.result))


def errored(workflow: Workflow) -> bool:
    """Check whether any step failed."""
    return workflow.failed_operation is not None


def rollback(workflow: Workflow) -> Result[ResultMap, StepFailure]:
    """Roll back committed steps, most recent first.

    Each rollback receives its step's identifier and the results
    as they stood before that step ran. Stops at the first
    rollback failure, returning the rollbacks that succeeded so
    far. Valid on a fully successful workflow as well.
    """
    undone: ResultMap = {}
    for entry in reversed(workflow.rollback_stack):
        logger.debug("Rolling back %r", entry.operation)
        outcome = _as_result(
            entry.rollback(entry.identifier, dict(entry.snapshot)),
            "rollback",
        )
        if isinstance(outcome, Failure):
            failure = StepFailure(
                operation=entry.operation,
                reason=outcome.failure(),
                results=undone,
            )
            logger.warning("Rollback %s", failure)
            return Failure(failure)
        undone = {**undone, entry.operation: outcome.unwrap()}
    return Success(undone)
