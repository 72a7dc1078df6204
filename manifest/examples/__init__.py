"""Example collaborators showing how workflows wrap real side effects."""
from manifest.examples.cache import (
    TokenCache,
    build_cache_workflow,
    mock_lookup,
)

__all__ = ["TokenCache", "build_cache_workflow", "mock_lookup"]
