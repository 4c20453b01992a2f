"""FastAPI dependencies."""
from dotest.dependencies.sessions import (
    get_content_cache,
    get_repository,
    get_rng,
    get_session_store,
)

__all__ = ["get_content_cache", "get_repository", "get_rng", "get_session_store"]
