"""
Purpose:
- Turn raw provider rows into Listing records for the UI.
- Model path: ask the language model for a JSON array of listings and coerce it.
- Local path: copy/truncate title + snippet and fill the rest from fixed catalogs.

What it reads from each raw row:
- title: "title" (SerpApi, mock) or "name" (Bing)
- description: "snippet" or "description"
- url: "link" or "url"

Input is capped at max_listings (8 by default) before either path runs.
"""

from __future__ import annotations
import json
import logging
import random
import re
from typing import Any, List, Optional, Sequence

from ..core.errors import UpstreamDegraded
from ..search.schema import DESCRIPTION_MAX, PROVINCES, TITLE_MAX, Listing, RawResult
from .llm import TextModel

logger = logging.getLogger(__name__)

MAX_LISTINGS = 8

AMENITY_BUNDLES: List[List[str]] = [
    ["Piscina", "Wifi", "Jardín", "BBQ", "Parking"],
    ["Aire acondicionado", "Chimenea", "Terraza", "Wifi", "Cocina equipada"],
    ["Piscina privada", "Wifi", "Vistas montaña", "Parking", "Jardín"],
    ["Jacuzzi", "Wifi", "Aire acondicionado", "BBQ", "Terraza"],
    ["Piscina", "Wifi", "Chimenea", "Jardín", "Parking gratuito"],
]

IMAGES: List[str] = [
    "https://images.unsplash.com/photo-1582268611958-ebfd161ef9cf?w=800",
    "https://images.unsplash.com/photo-1564013799919-ab600027ffc6?w=800",
    "https://images.unsplash.com/photo-1600596542815-ffad4c1539a9?w=800",
    "https://images.unsplash.com/photo-1600585154340-be6161a56a0c?w=800",
    "https://images.unsplash.com/photo-1600607687939-ce8a6c25118c?w=800",
    "https://images.unsplash.com/photo-1600566753190-17f0baa2a6c3?w=800",
    "https://images.unsplash.com/photo-1600573472591-ee6b68d14c68?w=800",
    "https://images.unsplash.com/photo-1600047509807-ba8f99d2cdde?w=800",
]

PROMPT_TEMPLATE = """Eres un experto en alojamientos rurales en Andalucía.
Analiza estos resultados de búsqueda para la consulta: "{query}"

RESULTADOS:
{results}

Extrae y estructura la información en formato JSON. Para cada resultado, incluye:
- id: número único
- title: título descriptivo
- description: descripción breve (max 150 caracteres)
- url: enlace web
- price: precio estimado (genera uno realista entre 60-250€/noche si no aparece)
- location: ciudad/zona en Andalucía
- bedrooms: número de habitaciones (estima entre 2-6 si no aparece)
- amenities: array con 3-5 servicios típicos (piscina, wifi, jardín, aire acondicionado, chimenea, parking, bbq, etc)
- image: URL de imagen (usa placeholder: https://images.unsplash.com/photo-[random-id]?w=800)

Responde SOLO con un array JSON válido, sin explicaciones adicionales."""

_FENCE_RE = re.compile(r"```(?:json)?\n?")

def _title_of(r: RawResult) -> str:
    return str(r.get("title") or r.get("name") or "")

def _snippet_of(r: RawResult) -> str:
    return str(r.get("snippet") or r.get("description") or "")

def _link_of(r: RawResult) -> str:
    return str(r.get("link") or r.get("url") or "")

def _truncate(s: str, n: int) -> str:
    return s[:n]

# --- Local transformation ---------------------------------------------------

def local_listings(raw: Sequence[RawResult]) -> List[Listing]:
    """
    Deterministic mapping: price and bedrooms are drawn from an RNG seeded by the index,
    everything else cycles through the fixed catalogs above.
    """
    out: List[Listing] = []
    for i, r in enumerate(raw):
        loc = PROVINCES[i % len(PROVINCES)]
        rng = random.Random(i)
        title = _title_of(r) or f"Casa Rural en {loc}"
        description = _snippet_of(r) or (
            f"Alquiler de casa rural en {loc}. Amplia, confortable y bien equipada."
        )
        out.append(Listing(
            id=f"listing-{i + 1}",
            title=_truncate(title, TITLE_MAX),
            description=_truncate(description, DESCRIPTION_MAX),
            url=_link_of(r) or "#",
            price=f"{rng.randint(80, 229)}€",
            location=loc,
            image=IMAGES[i % len(IMAGES)],
            bedrooms=rng.randint(2, 5),
            amenities=list(AMENITY_BUNDLES[i % len(AMENITY_BUNDLES)]),
        ))
    return out

# --- Model path -------------------------------------------------------------

def build_prompt(raw: Sequence[RawResult], original_query: str) -> str:
    blocks = []
    for i, r in enumerate(raw):
        blocks.append(
            f"{i + 1}. {_title_of(r)}\n{_snippet_of(r) or 'Sin descripción'}\n{_link_of(r)}"
        )
    return PROMPT_TEMPLATE.format(query=original_query, results="\n\n".join(blocks))

def strip_code_fences(text: str) -> str:
    return _FENCE_RE.sub("", text).strip()

def _price_text(v: Any) -> Optional[str]:
    if v is None or isinstance(v, bool):
        return None
    if isinstance(v, (int, float)):
        try:
            return f"{round(v)}€"
        except (TypeError, ValueError, OverflowError):
            return None
    s = str(v).strip()
    return s or None

def _opt_str(v: Any) -> Optional[str]:
    if v is None:
        return None
    s = str(v).strip()
    return s or None

def _bedrooms(v: Any) -> Optional[int]:
    if isinstance(v, bool):
        return None
    try:
        n = int(v)
    except (TypeError, ValueError, OverflowError):
        return None
    return n if n > 0 else None

def _amenities(v: Any) -> Optional[List[str]]:
    if not isinstance(v, list):
        return None
    return [str(a) for a in v if isinstance(a, (str, int, float)) and str(a).strip()]

def coerce_listings(items: List[Any], limit: int) -> List[Listing]:
    """
    Best-effort conversion of model output into Listings. Non-object entries are dropped,
    ids are made unique, text fields are cut to their bounds.
    """
    out: List[Listing] = []
    seen_ids = set()
    for i, it in enumerate(items[:limit]):
        if not isinstance(it, dict):
            continue
        lid = _opt_str(it.get("id"))
        n = i + 1
        while lid is None or lid in seen_ids:
            lid = f"listing-{n}"
            n += len(items)
        seen_ids.add(lid)
        title = _opt_str(it.get("title")) or f"Casa Rural en {PROVINCES[i % len(PROVINCES)]}"
        out.append(Listing(
            id=lid,
            title=_truncate(title, TITLE_MAX),
            description=_truncate(_opt_str(it.get("description")) or "", DESCRIPTION_MAX),
            url=_opt_str(it.get("url")) or "#",
            price=_price_text(it.get("price")),
            location=_opt_str(it.get("location")),
            image=_opt_str(it.get("image")),
            bedrooms=_bedrooms(it.get("bedrooms")),
            amenities=_amenities(it.get("amenities")),
        ))
    return out

def _model_listings(raw: Sequence[RawResult], original_query: str, model: TextModel, limit: int) -> List[Listing]:
    text = strip_code_fences(model.generate(build_prompt(raw, original_query)))
    try:
        parsed = json.loads(text)
    except ValueError as e:
        raise UpstreamDegraded(model.name, f"completion is not JSON: {e}") from e
    if not isinstance(parsed, list):
        raise UpstreamDegraded(model.name, f"expected a JSON array, got {type(parsed).__name__}")
    listings = coerce_listings(parsed, limit)
    if not listings:
        raise UpstreamDegraded(model.name, "no usable listing objects in completion")
    return listings

def structure_results(
    raw: Sequence[RawResult],
    original_query: str,
    model: Optional[TextModel],
    limit: int = MAX_LISTINGS,
) -> List[Listing]:
    head = list(raw[:limit])
    if model is None:
        logger.info("Language model not configured; structuring %d results locally.", len(head))
        return local_listings(head)
    if not head:
        return []
    try:
        return _model_listings(head, original_query, model, limit)
    except UpstreamDegraded as e:
        logger.warning("Result structuring failed, using local transformation: %s", e)
    except Exception as e:
        logger.warning("Result structuring failed unexpectedly, using local transformation: %r", e)
    return local_listings(head)
