"""
Purpose:
- Sanity-check critical library versions after upgrades.
- Import the exact modules we use and print versions so we can spot drift immediately.
"""

import sys
import fastapi
import uvicorn
import httpx
import pydantic
from pydantic_settings import BaseSettings

print("python", sys.version)
print("fastapi", fastapi.__version__)
print("uvicorn", uvicorn.__version__)
print("httpx", httpx.__version__)
print("pydantic", pydantic.__version__)
print("pydantic-settings", BaseSettings.__module__.split(".")[0])  # presence check
for opt in ("google.genai", "openai"):
    try:
        m = __import__(opt, fromlist=["_"])
        print(opt, getattr(m, "__version__", "unknown"))
    except ImportError:
        print(opt, "not-installed (LLM features fall back to rules)")
print("OK")
