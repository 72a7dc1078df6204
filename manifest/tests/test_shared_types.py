"""Tests for shared types (NoRollback, RollbackEntry, is_operation)."""
import dataclasses
from enum import Enum

import pytest
from returns.result import Success

from manifest.types import NoRollback, RollbackEntry, is_operation, no_rollback


class Kind(Enum):
    """Enum used as operation identifiers."""

    ONE = 1


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("cache_read", True),
        (Kind.ONE, True),
        ("", False),
        ("  ", False),
        (1, False),
        (None, False),
        (b"bytes", False),
    ],
)
def test_is_operation(value: object, expected: bool) -> None:  # noqa: FBT001
    """Only non-empty strings and Enum members name steps."""
    assert is_operation(value) is expected


def test_no_rollback_wraps_in_success() -> None:
    """no_rollback returns Success(NoRollback(value))."""
    assert no_rollback(5) == Success(NoRollback(5))


def test_types_are_frozen() -> None:
    """NoRollback and RollbackEntry are immutable."""
    entry = RollbackEntry(
        operation="a",
        rollback=lambda _id, _previous: Success(None),
        identifier=None,
        snapshot={},
    )
    for instance in (NoRollback(1), entry):
        assert dataclasses.is_dataclass(instance)
        assert type(instance).__dataclass_params__.frozen  # type: ignore[attr-defined]
