"""
Purpose:
- Centralized configuration using pydantic-settings.
- Reads from environment variables and optional .env file.
- Built once at process start and handed to the app factory; nothing mutates it afterwards.
"""

# --- Purpose: robust settings with env-file support and safe handling of extra keys.
from typing import List, Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # Pydantic v2 config (env file + ignore unexpected env vars)
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",          # <-- prevents crashes if extra env vars exist
    )

    # API host/port
    host: str = Field(default="0.0.0.0", description="Bind address for FastAPI/Uvicorn")
    port: int = Field(default=8000, description="Port for FastAPI/Uvicorn")
    log_level: str = Field(default="INFO", description="Root log level")

    # CORS
    cors_allow_origins: List[str] = Field(
        default=["http://localhost:3000"],
        description="Allowed origins for browser apps"
    )

    # ---- Language model (optional) ----
    # Keys come from env (.env or shell): GEMINI_API_KEY, OPENAI_API_KEY
    llm_provider: str = Field(default="gemini", description='"gemini" | "openai"')
    gemini_api_key: Optional[str] = None
    google_model: str = Field(default="gemini-1.5-flash")
    openai_api_key: Optional[str] = None
    openai_model: str = Field(default="gpt-4o-mini")
    llm_temperature: float = Field(default=0.4)
    llm_timeout_s: float = Field(default=20.0, description="Per-call timeout for the language model")

    # ---- Search providers (optional; mock data when neither is set) ----
    serpapi_key: Optional[str] = None
    serpapi_endpoint: str = Field(default="https://serpapi.com/search")
    bing_search_key: Optional[str] = None
    bing_search_endpoint: Optional[str] = None

    search_timeout_s: float = Field(default=5.0, description="Per-call timeout for search providers")
    search_num_results: int = Field(default=10, description="Results requested from each provider")
    search_country: str = Field(default="es")
    search_language: str = Field(default="es")
    bing_market: str = Field(default="es-ES")

    # ---- Response sizing ----
    max_listings: int = Field(default=8, ge=1, le=8, description="Cap on listings per response")

    @property
    def llm_configured(self) -> bool:
        if self.llm_provider == "openai":
            return bool(self.openai_api_key)
        return bool(self.gemini_api_key)

settings = Settings()
