"""
Purpose:
- Retrieval strategies for the search pipeline, tried in priority order:
  SerpApi (Google engine) -> Bing Web Search -> local mock generator.
- Remote strategies raise UpstreamDegraded on any failure so the caller can fall through.

Notes:
- Requires: settings.serpapi_key, or settings.bing_search_key + settings.bing_search_endpoint
  (from .env or env). A strategy without credentials reports configured=False and is skipped.
- One request per call, short timeout, no retries.
"""

from __future__ import annotations
from typing import Any, Dict, List
import httpx
from .schema import PROVINCES, RawResult
from ..core.errors import UpstreamDegraded
from ..core.settings import Settings

PROPERTY_TYPES = ["Casa Rural", "Cortijo", "Villa", "Finca", "Chalet"]
MOCK_RESULT_COUNT = 8

def _get_json(source: str, url: str, *, params: Dict[str, Any], headers: Dict[str, str] | None, timeout: float) -> Dict[str, Any]:
    try:
        r = httpx.get(url, params=params, headers=headers, timeout=timeout)
        r.raise_for_status()
        data = r.json()
    except httpx.TimeoutException as e:
        raise UpstreamDegraded(source, f"timeout after {timeout}s") from e
    except httpx.HTTPStatusError as e:
        raise UpstreamDegraded(source, f"HTTP {e.response.status_code}") from e
    except (httpx.HTTPError, ValueError) as e:
        raise UpstreamDegraded(source, f"{type(e).__name__}: {e}") from e
    if not isinstance(data, dict):
        raise UpstreamDegraded(source, "unexpected response body")
    return data

def _rows(source: str, value: Any) -> List[RawResult]:
    # missing list = no hits; anything other than a list is a malformed body
    if value is None:
        return []
    if not isinstance(value, list):
        raise UpstreamDegraded(source, f"unexpected response body: expected a list, got {type(value).__name__}")
    return [it for it in value if isinstance(it, dict)]

class SerpApiProvider:
    name = "serpapi"

    def __init__(self, cfg: Settings):
        self.cfg = cfg

    @property
    def configured(self) -> bool:
        return bool(self.cfg.serpapi_key)

    def search(self, query: str) -> List[RawResult]:
        params = {
            "q": query,
            "api_key": self.cfg.serpapi_key,
            "engine": "google",
            "gl": self.cfg.search_country,
            "hl": self.cfg.search_language,
            "num": self.cfg.search_num_results,
        }
        data = _get_json(self.name, self.cfg.serpapi_endpoint, params=params, headers=None, timeout=self.cfg.search_timeout_s)
        return _rows(self.name, data.get("organic_results"))

class BingProvider:
    name = "bing"

    def __init__(self, cfg: Settings):
        self.cfg = cfg

    @property
    def configured(self) -> bool:
        return bool(self.cfg.bing_search_key and self.cfg.bing_search_endpoint)

    def search(self, query: str) -> List[RawResult]:
        params = {
            "q": query,
            "mkt": self.cfg.bing_market,
            "count": self.cfg.search_num_results,
        }
        headers = {"Ocp-Apim-Subscription-Key": self.cfg.bing_search_key or ""}
        data = _get_json(self.name, str(self.cfg.bing_search_endpoint), params=params, headers=headers, timeout=self.cfg.search_timeout_s)
        pages = data.get("webPages")
        if pages is None:
            return []
        if not isinstance(pages, dict):
            raise UpstreamDegraded(self.name, "unexpected response body: webPages is not an object")
        return _rows(self.name, pages.get("value"))

def generate_mock_results(count: int = MOCK_RESULT_COUNT) -> List[RawResult]:
    """
    Plausible listings built only from the position index, so the output never changes.
    """
    out: List[RawResult] = []
    for i in range(count):
        kind = PROPERTY_TYPES[i % len(PROPERTY_TYPES)]
        loc = PROVINCES[i % len(PROVINCES)]
        out.append({
            "title": f"{kind} en {loc} - Alquiler Rural",
            "snippet": (
                f"Hermosa {kind.lower()} en {loc} con todas las comodidades. "
                "Piscina, wifi, jardín y vistas espectaculares. Ideal para familias y grupos."
            ),
            "link": f"https://ejemplo{i + 1}.com/casa-rural-{loc.lower()}",
            "position": i + 1,
        })
    return out

class MockProvider:
    name = "mock"
    configured = True

    def search(self, query: str) -> List[RawResult]:
        return generate_mock_results()

def default_providers(cfg: Settings) -> list:
    return [SerpApiProvider(cfg), BingProvider(cfg)]
