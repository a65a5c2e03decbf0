"""
Purpose:
- Expose GET /search (and the legacy /api/search path) backing the search orchestrator.
- Query params are read as raw strings and converted leniently; only "q" is required.
"""

import logging
import math
from typing import Optional

from fastapi import APIRouter, Query, Request
from fastapi.responses import JSONResponse

from ..core.errors import InvalidRequest
from ..core.settings import Settings
from ..search.schema import SearchFilters, SearchRequest
from ..search.service import search_service
from ..services.llm import get_text_model

logger = logging.getLogger(__name__)

router = APIRouter(tags=["search"])

INTERNAL_ERROR_MESSAGE = "Unexpected error while processing the search"

def _to_float(raw: Optional[str]) -> Optional[float]:
    if not raw:
        return None
    try:
        v = float(raw)
    except ValueError:
        return None
    return v if math.isfinite(v) else None

def _to_int(raw: Optional[str]) -> Optional[int]:
    v = _to_float(raw)
    return int(v) if v is not None else None

@router.get("/search")
@router.get("/api/search", include_in_schema=False)
def search(
    request: Request,
    q: Optional[str] = Query(default=None, description="Free-text search"),
    guests: Optional[str] = Query(default=None),
    price_min: Optional[str] = Query(default=None, alias="priceMin"),
    price_max: Optional[str] = Query(default=None, alias="priceMax"),
    location: Optional[str] = Query(default=None),
):
    cfg: Settings = request.app.state.settings
    try:
        payload = SearchRequest(
            query=q or "",
            filters=SearchFilters(
                guests=_to_int(guests),
                price_min=_to_float(price_min),
                price_max=_to_float(price_max),
                location=location or None,
            ),
        )
        resp = search_service(payload, cfg, model=get_text_model(cfg))
        return resp.to_json()
    except InvalidRequest as e:
        return JSONResponse(status_code=400, content={"error": str(e)})
    except Exception:
        # InternalError from the pipeline, or anything raised before it ran
        logger.exception("Error in search API")
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error", "message": INTERNAL_ERROR_MESSAGE},
        )
