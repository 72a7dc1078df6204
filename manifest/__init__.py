"""Manifest -- order fallible operations and roll them back on failure.

Build a workflow with new_workflow(), add_operation() and merge(),
run it with perform(), then inspect it with digest() or undo its
committed steps with rollback().
"""
from manifest.engine import (
    add_branch,
    add_operation,
    add_step,
    build_branch,
    build_step,
    digest,
    errored,
    merge,
    new_workflow,
    perform,
    rollback,
)
from manifest.engine.types import Branch, Merge, Step, Workflow
from manifest.errors import (
    DuplicateOperationError,
    InvalidOperationError,
    MalformedReturnError,
    ManifestError,
    NotAStepError,
    NotCallableError,
    StepFailure,
)
from manifest.types import NoRollback, no_rollback

__all__ = [
    "Branch",
    "DuplicateOperationError",
    "InvalidOperationError",
    "MalformedReturnError",
    "ManifestError",
    "Merge",
    "NoRollback",
    "NotAStepError",
    "NotCallableError",
    "Step",
    "StepFailure",
    "Workflow",
    "add_branch",
    "add_operation",
    "add_step",
    "build_branch",
    "build_step",
    "digest",
    "errored",
    "merge",
    "new_workflow",
    "no_rollback",
    "perform",
    "rollback",
]
