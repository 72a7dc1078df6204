"""Settings for the manifest demo and its logging.

The engine itself reads no configuration; only entry points call
load_settings().
"""
from __future__ import annotations

import os
from typing import TYPE_CHECKING, Literal

from pydantic import BaseModel, ConfigDict

if TYPE_CHECKING:
    from collections.abc import Mapping

DEFAULT_AUTH_TOKEN = "manifest-demo"

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]

_ENV_FIELDS = {
    "MANIFEST_LOG_LEVEL": "log_level",
    "MANIFEST_LOG_FILE": "log_file",
    "MANIFEST_AUTH_TOKEN": "auth_token",
}


class ManifestSettings(BaseModel):
    """Validated settings for entry points."""

    model_config = ConfigDict(frozen=True)

    log_level: LogLevel = "WARNING"
    log_file: str | None = None
    auth_token: str = DEFAULT_AUTH_TOKEN


def load_settings(
    environ: Mapping[str, str] | None = None,
) -> ManifestSettings:
    """Build settings from MANIFEST_* variables.

    Unset or empty variables keep their defaults. Raises
    pydantic.ValidationError for invalid values.
    """
    source = os.environ if environ is None else environ
    values: dict[str, str] = {}
    for env_name, field_name in _ENV_FIELDS.items():
        raw = source.get(env_name, "").strip()
        if raw:
            values[field_name] = (
                raw.upper() if field_name == "log_level" else raw
            )
    return ManifestSettings.model_validate(values)
