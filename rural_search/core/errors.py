"""
Purpose:
- Error taxonomy for the search pipeline.

- InvalidRequest: the caller sent no query (HTTP 400).
- UpstreamDegraded: a provider or the language model failed; always caught at the
  stage boundary and replaced by a local fallback, never shown to the client.
- InternalError: anything else that reaches the HTTP layer (HTTP 500).
"""

from __future__ import annotations

class SearchError(Exception):
    """Base class for pipeline errors."""

class InvalidRequest(SearchError):
    pass

class UpstreamDegraded(SearchError):
    def __init__(self, source: str, reason: str):
        super().__init__(f"{source}: {reason}")
        self.source = source
        self.reason = reason

class InternalError(SearchError):
    pass
