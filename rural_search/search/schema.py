"""
Purpose:
- Pydantic models for search in/out so the API is self-documenting and stable.
- Raw provider rows stay plain dicts (RawResult); only the outgoing Listing is normalized.
"""

from __future__ import annotations
from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Optional

# Andalusian provinces, in the order the local generators cycle through them
PROVINCES: List[str] = [
    "Granada",
    "Málaga",
    "Sevilla",
    "Córdoba",
    "Cádiz",
    "Almería",
    "Jaén",
    "Huelva",
]

TITLE_MAX = 80
DESCRIPTION_MAX = 150

# Provider-specific row: SerpApi {title, snippet, link}, Bing {name, snippet, url}, mock {title, snippet, link, position}
RawResult = Dict[str, Any]

class SearchFilters(BaseModel):
    model_config = ConfigDict(frozen=True)

    guests: Optional[int] = Field(default=None, description="Number of guests")
    price_min: Optional[float] = Field(default=None, description="Minimum nightly price (EUR)")
    price_max: Optional[float] = Field(default=None, description="Maximum nightly price (EUR)")
    # One of PROVINCES in practice; not validated
    location: Optional[str] = None

class SearchRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    query: str = Field(..., description="User's search text")
    filters: SearchFilters = Field(default_factory=SearchFilters)

class Listing(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    title: str = Field(..., max_length=TITLE_MAX)
    description: str = Field(..., max_length=DESCRIPTION_MAX)
    url: str = "#"
    price: Optional[str] = None
    location: Optional[str] = None
    image: Optional[str] = None
    bedrooms: Optional[int] = None
    amenities: Optional[List[str]] = None

class SearchResponse(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    success: bool = True
    query: str
    enhanced_query: str = Field(..., alias="enhancedQuery")
    results: List[Listing] = []
    timestamp: str

    def to_json(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)
