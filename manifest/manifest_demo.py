"""Run the example cache workflow from the command line.

Performs the cache workflow, prints its digest and, when the run
failed, rolls the committed steps back and prints that outcome.
"""
from __future__ import annotations

import logging
import sys
from dataclasses import dataclass

import click
from pydantic import ValidationError
from returns.result import Failure, Result

from manifest.config import ManifestSettings, load_settings
from manifest.engine.executor import digest, errored, perform, rollback
from manifest.errors import StepFailure
from manifest.examples.cache import TokenCache, build_cache_workflow
from manifest.log import configure_logging

logger = logging.getLogger(__name__)

WRONG_TOKEN = "wrong_token"


@dataclass(frozen=True)
class DemoResult:
    """Outcome of one demo run.

    rollback_outcome is None when no rollback was attempted.
    """

    digest_outcome: Result[dict[object, object], StepFailure]
    rollback_outcome: Result[dict[object, object], StepFailure] | None
    cache_contents: dict[object, object]
    failed: bool


def run_demo(
    settings: ManifestSettings,
    record_id: int,
    *,
    fail: bool = False,
    roll_back: bool = True,
) -> DemoResult:
    """Perform the cache workflow and roll back on failure."""
    cache = TokenCache(settings.auth_token)
    workflow = build_cache_workflow(
        cache,
        settings.auth_token,
        record_id,
        recheck_token=WRONG_TOKEN if fail else None,
    )
    performed = perform(workflow)
    failed = errored(performed)

    rollback_outcome = None
    if failed and roll_back:
        logger.info("Workflow failed, rolling back")
        rollback_outcome = rollback(performed)

    return DemoResult(
        digest_outcome=digest(performed),
        rollback_outcome=rollback_outcome,
        cache_contents=cache.snapshot(),
        failed=failed,
    )


def format_outcome(
    label: str,
    outcome: Result[dict[object, object], StepFailure],
) -> str:
    """Render a digest or rollback outcome as one line."""
    if isinstance(outcome, Failure):
        return f"{label}: {outcome.failure()}"
    return f"{label}: ok {outcome.unwrap()!r}"


@click.command()
@click.option(
    "--record-id",
    default=5,
    type=int,
    help="Record to read and cache (default: 5)",
)
@click.option(
    "--fail",
    is_flag=True,
    help="Re-read the cache with a wrong token so the last step fails",
)
@click.option(
    "--rollback/--no-rollback",
    "roll_back",
    default=True,
    help="Roll back committed steps when the run fails (default: on)",
)
def main(record_id: int, fail: bool, roll_back: bool) -> None:
    """Perform the example cache workflow and report the outcome."""
    try:
        settings = load_settings()
    except ValidationError as exc:
        click.echo(f"Invalid settings: {exc}", err=True)
        sys.exit(2)

    configure_logging(settings.log_level, settings.log_file)

    result = run_demo(
        settings,
        record_id,
        fail=fail,
        roll_back=roll_back,
    )
    click.echo(format_outcome("digest", result.digest_outcome))
    if result.rollback_outcome is not None:
        click.echo(format_outcome("rollback", result.rollback_outcome))
    click.echo(f"cache: {result.cache_contents!r}")

    if result.failed:
        sys.exit(1)


if __name__ == "__main__":
    main()
