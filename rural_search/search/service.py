"""
Purpose:
- The "service" orchestrates query -> enhance -> retrieve -> structure -> response.
- Every stage degrades to a local fallback; only an empty query is an error here.
"""

from __future__ import annotations
import logging
from datetime import datetime, timezone
from typing import List, Optional, Sequence

from .schema import RawResult, SearchRequest, SearchResponse
from .providers import MockProvider, default_providers
from ..core.errors import InternalError, InvalidRequest, UpstreamDegraded
from ..core.settings import Settings
from ..services.llm import TextModel
from ..services.query_enhancer import enhance_query
from ..services.structurer import structure_results

logger = logging.getLogger(__name__)

def _utc_timestamp() -> str:
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")

def retrieve(enhanced_query: str, providers: Sequence) -> List[RawResult]:
    """
    Try each configured provider in order; the first non-empty answer wins.
    Failures are logged and skipped. The mock generator always answers last.
    """
    for p in providers:
        if not p.configured:
            continue
        try:
            rows = p.search(enhanced_query)
        except UpstreamDegraded as e:
            logger.warning("Search provider failed, falling back: %s", e)
            continue
        if rows:
            logger.info("Using %s for search (%d results)", p.name, len(rows))
            return rows
        logger.warning("Search provider %s returned no results, falling back", p.name)

    logger.info("No external search API available; returning mock results")
    return MockProvider().search(enhanced_query)

def search_service(
    payload: SearchRequest,
    cfg: Settings,
    model: Optional[TextModel] = None,
    providers: Optional[Sequence] = None,
) -> SearchResponse:
    if not payload.query:
        raise InvalidRequest('Query parameter "q" is required')

    try:
        enhanced = enhance_query(payload.query, payload.filters, model)

        chain = providers if providers is not None else default_providers(cfg)
        raw = retrieve(enhanced, chain)

        listings = structure_results(raw, payload.query, model, limit=cfg.max_listings)
    except Exception as e:
        raise InternalError(f"search pipeline failed: {e!r}") from e

    return SearchResponse(
        query=payload.query,
        enhanced_query=enhanced,
        results=listings,
        timestamp=_utc_timestamp(),
    )
