"""
Purpose:
- Optional language-model collaborator used by query enhancement and result structuring.
- Gemini (google-genai) by default; OpenAI when LLM_PROVIDER=openai.

Design:
- get_text_model() returns None when no key is configured or the SDK cannot be loaded;
  callers branch on None and use their deterministic fallback.
- Both SDKs are imported at call time so an unused one never has to be importable.
- generate() raises UpstreamDegraded on any failure; it never returns an empty string.
"""

from __future__ import annotations
import logging
from typing import Optional, Protocol

from ..core.errors import UpstreamDegraded
from ..core.settings import Settings

logger = logging.getLogger(__name__)

class TextModel(Protocol):
    name: str

    def generate(self, prompt: str) -> str: ...

class GeminiModel:
    name = "gemini"

    def __init__(self, api_key: str, model_name: str, temperature: float, timeout_s: float):
        from google import genai
        from google.genai import types

        self._types = types
        # HttpOptions.timeout is in milliseconds
        self.client = genai.Client(
            api_key=api_key,
            http_options=types.HttpOptions(timeout=int(timeout_s * 1000)),
        )
        self.model_name = model_name
        self.temperature = temperature

    def generate(self, prompt: str) -> str:
        try:
            response = self.client.models.generate_content(
                model=self.model_name,
                contents=prompt,
                config=self._types.GenerateContentConfig(temperature=self.temperature),
            )
            text = (response.text or "").strip()
        except Exception as e:
            raise UpstreamDegraded(self.name, f"{type(e).__name__}: {e}") from e
        if not text:
            raise UpstreamDegraded(self.name, "empty completion")
        return text

class OpenAIModel:
    name = "openai"

    def __init__(self, api_key: str, model_name: str, temperature: float, timeout_s: float):
        from openai import OpenAI

        # one attempt per call; the caller falls back instead of retrying
        self.client = OpenAI(api_key=api_key, timeout=timeout_s, max_retries=0)
        self.model_name = model_name
        self.temperature = temperature

    def generate(self, prompt: str) -> str:
        try:
            resp = self.client.chat.completions.create(
                model=self.model_name,
                messages=[
                    {"role": "system", "content": "You help people find rural holiday rentals in Andalusia, Spain."},
                    {"role": "user", "content": prompt},
                ],
                temperature=self.temperature,
            )
            text = (resp.choices[0].message.content or "").strip()
        except Exception as e:
            raise UpstreamDegraded(self.name, f"{type(e).__name__}: {e}") from e
        if not text:
            raise UpstreamDegraded(self.name, "empty completion")
        return text

def get_text_model(cfg: Settings) -> Optional[TextModel]:
    """
    Build the configured model client for one request, or None if there is no usable one.
    """
    if not cfg.llm_configured:
        return None
    try:
        if cfg.llm_provider == "openai":
            return OpenAIModel(cfg.openai_api_key or "", cfg.openai_model, cfg.llm_temperature, cfg.llm_timeout_s)
        return GeminiModel(cfg.gemini_api_key or "", cfg.google_model, cfg.llm_temperature, cfg.llm_timeout_s)
    except Exception as e:
        logger.warning("%s client not available (skipping): %s", cfg.llm_provider, e)
        return None
