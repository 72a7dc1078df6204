"""Engine package -- ordered steps with compensating rollbacks."""
from manifest.engine.builders import (
    add_branch,
    add_operation,
    add_step,
    build_branch,
    build_step,
    merge,
    new_workflow,
)
from manifest.engine.executor import (
    digest,
    errored,
    perform,
    rollback,
    run_step,
)

__all__ = [
    "add_branch",
    "add_operation",
    "add_step",
    "build_branch",
    "build_step",
    "digest",
    "errored",
    "merge",
    "new_workflow",
    "perform",
    "rollback",
    "run_step",
]
