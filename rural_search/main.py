"""
Purpose:
- FastAPI application factory and router mounts.
- Adds CORS for the local Next.js dev server.
- Uvicorn will serve this on 0.0.0.0:8000 by default (`rural-search` console script).
"""

from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from .core.settings import Settings, settings
from .core.logging_setup import configure_logging
from .api.health import router as health_router
from .api.search import router as search_router

def create_app(cfg: Optional[Settings] = None) -> FastAPI:
    cfg = cfg or settings
    configure_logging(cfg.log_level)
    app = FastAPI(title="Rural Search API", version="0.1.0")
    app.state.settings = cfg
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"],
    )
    app.include_router(health_router)
    app.include_router(search_router)
    return app

app = create_app()

def run() -> None:
    uvicorn.run("rural_search.main:app", host=settings.host, port=settings.port)
