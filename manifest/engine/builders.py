"""Workflow builders -- pure data composition.

Builders validate and produce Step/Branch/Merge/Workflow values.
They do NOT execute anything; the executor handles execution.
Validation lives on the instruction types themselves and is
structural only: callables are checked for being callable, never
for their arity or return values.
"""
from __future__ import annotations

import warnings
from typing import TYPE_CHECKING

from manifest.engine.types import (
    Branch,
    Merge,
    Step,
    Workflow,
    default_parser,
    noop_rollback,
)
from manifest.errors import DuplicateOperationError, NotAStepError

if TYPE_CHECKING:
    from manifest.engine.types import (
        ConditionalFunction,
        Instruction,
        MergeFunction,
        ParserFunction,
        WorkFunction,
    )
    from manifest.types import RollbackFunction


def new_workflow() -> Workflow:
    """Return an empty workflow."""
    return Workflow()


def build_step(
    operation: object,
    work: WorkFunction,
    rollback: RollbackFunction = noop_rollback,
    parser: ParserFunction = default_parser,
) -> Step:
    """Build a validated Step.

    Raises InvalidOperationError for an operation that is not a
    non-empty str or Enum member, and NotCallableError naming the
    first of work, rollback, parser that is not callable.
    """
    return Step(
        operation=operation,  # type: ignore[arg-type]
        work=work,
        parser=parser,
        rollback=rollback,
    )


def build_branch(
    conditional: ConditionalFunction,
    success: Step,
    failure: Step,
) -> Branch:
    """Build a Branch choosing between two steps at run time.

    Deprecated: use merge() with a function that returns the
    workflow to run instead.
    """
    warnings.warn(
        "build_branch is deprecated; use merge() instead",
        DeprecationWarning,
        stacklevel=2,
    )
    return Branch(conditional=conditional, success=success, failure=failure)


def add_step(workflow: Workflow, instruction: Instruction) -> Workflow:
    """Append a Step, Branch or Merge to the workflow.

    Steps are executed in the order they are added. A Step whose
    operation is already declared directly in the workflow raises
    DuplicateOperationError.
    """
    if not isinstance(instruction, (Step, Branch, Merge)):
        raise NotAStepError("step", instruction)
    if isinstance(instruction, Step):
        _ensure_not_declared(workflow, instruction.operation)
    return workflow.with_instruction(instruction)


def add_operation(
    workflow: Workflow,
    operation: object,
    work: WorkFunction,
    rollback: RollbackFunction = noop_rollback,
    parser: ParserFunction = default_parser,
) -> Workflow:
    """Combine build_step() and add_step() into one call."""
    step = build_step(operation, work, rollback, parser)
    return add_step(workflow, step)


def add_branch(workflow: Workflow, branch: Branch) -> Workflow:
    """Deprecated: add a Branch built by build_branch()."""
    warnings.warn(
        "add_branch is deprecated; use merge() instead",
        DeprecationWarning,
        stacklevel=2,
    )
    return add_step(workflow, branch)


def merge(workflow: Workflow, merge_fn: MergeFunction) -> Workflow:
    """Append a Merge whose function builds the workflow to splice in.

    merge_fn receives the results so far and must return a
    Workflow; its instructions run in place of the Merge.
    """
    return workflow.with_instruction(Merge(merge=merge_fn))


def _ensure_not_declared(workflow: Workflow, operation: object) -> None:
    for declared in workflow.instructions:
        if isinstance(declared, Step) and declared.operation == operation:
            raise DuplicateOperationError(operation)
