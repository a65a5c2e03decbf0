# Common language: Environment/ops probe that surfaces version pins and which upstreams are wired.
# Use this before/after upgrades to confirm no silent drift.

from fastapi import APIRouter, Request
from ..core.settings import Settings
import sys, importlib

router = APIRouter(tags=["health"])

def _ver(modname: str) -> str:
    try:
        m = importlib.import_module(modname)
        return getattr(m, "__version__", "unknown")
    except Exception:
        return "not-installed"

@router.get("/healthz")
def healthz(request: Request):
    cfg: Settings = request.app.state.settings
    return {
        "status": "ok",
        "python": sys.version.split()[0],
        "versions": {
            "fastapi": _ver("fastapi"),
            "uvicorn": _ver("uvicorn"),
            "pydantic": _ver("pydantic"),
            "pydantic_settings": _ver("pydantic_settings"),
            "httpx": _ver("httpx"),
            "google_genai": _ver("google.genai"),
            "openai": _ver("openai"),
        },
        "llm": {
            "provider": cfg.llm_provider,
            "configured": cfg.llm_configured,
            "model": cfg.openai_model if cfg.llm_provider == "openai" else cfg.google_model,
        },
        "search_config": {
            "timeout_s": cfg.search_timeout_s,
            "max_listings": cfg.max_listings,
            "env_keys_present": {
                "GEMINI_API_KEY": bool(cfg.gemini_api_key),
                "OPENAI_API_KEY": bool(cfg.openai_api_key),
                "SERPAPI_KEY": bool(cfg.serpapi_key),
                "BING_SEARCH_KEY": bool(cfg.bing_search_key),
                "BING_SEARCH_ENDPOINT": bool(cfg.bing_search_endpoint),
            },
        },
    }
