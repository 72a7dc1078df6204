"""Tests for the manifest-demo CLI entry point.

Uses Click's CliRunner for in-process testing.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

import click.testing
import pytest
from returns.result import Failure, Success

from manifest.config import ManifestSettings
from manifest.errors import StepFailure
from manifest.manifest_demo import format_outcome, main, run_demo

if TYPE_CHECKING:
    from pytest_mock import MockerFixture


@pytest.fixture(autouse=True)
def _clear_manifest_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("MANIFEST_LOG_LEVEL", "MANIFEST_LOG_FILE", "MANIFEST_AUTH_TOKEN"):
        monkeypatch.delenv(name, raising=False)


class TestRunDemo:
    """Tests for run_demo."""

    def test_success_run(self, demo_settings: ManifestSettings) -> None:
        """A clean run caches the record and skips rollback."""
        result = run_demo(demo_settings, 5)
        assert result.failed is False
        assert result.rollback_outcome is None
        assert result.cache_contents == {5: {"id": 5, "content": "Anything"}}

    def test_failed_run_rolls_back(
        self,
        demo_settings: ManifestSettings,
    ) -> None:
        """A failing run is rolled back, emptying the cache."""
        result = run_demo(demo_settings, 5, fail=True)
        assert result.failed is True
        assert result.rollback_outcome == Success({"cache_put": 5})
        assert result.cache_contents == {}

    def test_failed_run_without_rollback(
        self,
        demo_settings: ManifestSettings,
    ) -> None:
        """roll_back=False leaves the committed work in place."""
        result = run_demo(demo_settings, 5, fail=True, roll_back=False)
        assert result.rollback_outcome is None
        assert result.cache_contents == {5: {"id": 5, "content": "Anything"}}


class TestFormatOutcome:
    """Tests for format_outcome."""

    def test_success(self) -> None:
        """Success renders as ok with the results."""
        assert format_outcome("digest", Success({"a": 1})) == "digest: ok {'a': 1}"

    def test_failure(self) -> None:
        """Failure names the operation, reason and completed work."""
        line = format_outcome(
            "rollback",
            Failure(StepFailure(operation="a", reason="x", results={})),
        )
        assert line == "rollback: failed at a ('x'), completed={}"


class TestDemoCLI:
    """Tests for the click command."""

    def test_success_exit_zero(self, mocker: MockerFixture) -> None:
        """A successful run prints the digest and exits 0."""
        configure = mocker.patch("manifest.manifest_demo.configure_logging")
        runner = click.testing.CliRunner()
        result = runner.invoke(main, ["--record-id", "3"])
        assert result.exit_code == 0
        assert "digest: ok" in result.output
        assert "rollback:" not in result.output
        assert "cache: {3:" in result.output
        configure.assert_called_once_with("WARNING", None)

    def test_fail_rolls_back_and_exits_one(
        self,
        mocker: MockerFixture,
    ) -> None:
        """--fail halts, rolls back and exits 1."""
        mocker.patch("manifest.manifest_demo.configure_logging")
        runner = click.testing.CliRunner()
        result = runner.invoke(main, ["--fail"])
        assert result.exit_code == 1
        assert "digest: failed at look_again ('unauthenticated')" in result.output
        assert "rollback: ok {'cache_put': 5}" in result.output
        assert "cache: {}" in result.output

    def test_no_rollback_flag(self, mocker: MockerFixture) -> None:
        """--no-rollback skips the rollback."""
        mocker.patch("manifest.manifest_demo.configure_logging")
        runner = click.testing.CliRunner()
        result = runner.invoke(main, ["--fail", "--no-rollback"])
        assert result.exit_code == 1
        assert "rollback:" not in result.output

    def test_invalid_settings_exit_two(
        self,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Invalid MANIFEST_* settings exit 2."""
        monkeypatch.setenv("MANIFEST_LOG_LEVEL", "chatty")
        runner = click.testing.CliRunner()
        result = runner.invoke(main, [])
        assert result.exit_code == 2
        assert "Invalid settings" in result.output
