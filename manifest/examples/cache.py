"""Token-guarded cache and a workflow that writes through it.

The cache stands in for any external resource: every call checks
the caller's token and reports Failure("unauthenticated") when it
does not match, so workflows can exercise halting and rollback.
"""
from __future__ import annotations

from returns.result import Failure, Result, Success

from manifest.engine.builders import add_operation, new_workflow
from manifest.engine.types import Workflow
from manifest.types import ResultMap, no_rollback

UNAUTHENTICATED = "unauthenticated"


class TokenCache:
    """In-memory key/value store that only answers to one token."""

    def __init__(self, auth_token: str) -> None:
        self._auth_token = auth_token
        self._entries: dict[object, object] = {}

    def _authenticated(self, token: str) -> bool:
        return token == self._auth_token

    def lookup(self, token: str, key: object) -> Result[object, str]:
        if not self._authenticated(token):
            return Failure(UNAUTHENTICATED)
        return Success(self._entries.get(key))

    def put(self, token: str, key: object, value: object) -> Result[None, str]:
        if not self._authenticated(token):
            return Failure(UNAUTHENTICATED)
        self._entries[key] = value
        return Success(None)

    def delete(self, token: str, key: object) -> Result[None, str]:
        if not self._authenticated(token):
            return Failure(UNAUTHENTICATED)
        self._entries.pop(key, None)
        return Success(None)

    def snapshot(self) -> dict[object, object]:
        """Return a copy of the stored entries."""
        return dict(self._entries)


def mock_lookup(record_id: int) -> dict[str, object]:
    """Stand-in for a database read."""
    return {"id": record_id, "content": "Anything"}


def build_cache_workflow(
    cache: TokenCache,
    token: str,
    record_id: int,
    recheck_token: str | None = None,
) -> Workflow:
    """Read a record, cache it, and optionally re-read the cache.

    cache_read and database_read commit without rollback. cache_put
    returns the record id, which its rollback deletes again. When
    recheck_token is given a final look_again step reads the cache
    with it and halts the workflow if the cache rejects the token.
    """

    def cache_read(_previous: ResultMap) -> Result[object, object]:
        return cache.lookup(token, record_id).bind(no_rollback)

    def database_read(_previous: ResultMap) -> Result[object, object]:
        return no_rollback(mock_lookup(record_id))

    def cache_put(previous: ResultMap) -> Result[object, object]:
        record = previous["database_read"]
        key = record["id"]  # type: ignore[index]
        return cache.put(token, key, record).map(lambda _: key)

    def uncache(key: object, _previous: ResultMap) -> Result[object, object]:
        return cache.delete(token, key).map(lambda _: key)

    workflow = new_workflow()
    workflow = add_operation(workflow, "cache_read", cache_read)
    workflow = add_operation(workflow, "database_read", database_read)
    workflow = add_operation(workflow, "cache_put", cache_put, uncache)

    if recheck_token is not None:

        def look_again(_previous: ResultMap) -> Result[object, object]:
            return cache.lookup(recheck_token, record_id).bind(no_rollback)

        workflow = add_operation(workflow, "look_again", look_again)

    return workflow
