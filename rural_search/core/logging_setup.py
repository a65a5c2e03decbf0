"""
Purpose:
- One place to configure stdlib logging for the API process.
- Modules log through logging.getLogger(__name__); only this file touches handlers.
"""

from __future__ import annotations
import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

def configure_logging(level: str = "INFO") -> None:
    lvl = getattr(logging, (level or "INFO").upper(), logging.INFO)
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=lvl, format=LOG_FORMAT)
    root.setLevel(lvl)
    # httpx logs every request at INFO, which would include provider URLs with keys
    logging.getLogger("httpx").setLevel(logging.WARNING)
