"""
Purpose:
- Turn the user's free text + filters into a search-engine query biased toward rural
  rentals in the sierra.
- Uses the optional language model when one is configured; otherwise a fixed rule.

Design:
- The rule-based query is deterministic and cannot fail.
- Any model failure collapses to FALLBACK_TEMPLATE, so this stage never raises.
"""

from __future__ import annotations
import logging
from typing import List, Optional

from ..core.errors import UpstreamDegraded
from ..search.schema import SearchFilters
from .llm import TextModel

logger = logging.getLogger(__name__)

FALLBACK_TEMPLATE = "casa rural alquiler Andalucía {query}"

PROMPT_TEMPLATE = """Eres un experto en búsquedas de alojamientos rurales en Andalucía, España.
Analiza esta búsqueda del usuario: "{query}"

Ten en cuenta estas restricciones/opciones del usuario:
- Provincia o zona preferida: {location}
- Número de personas: {guests}
- Rango de precio por noche: {price_min} a {price_max}

Prioriza resultados que:
- Estén en la sierra o zonas montañosas y permitan actividades en el entorno (senderismo, rutas, miradores, pueblos cercanos).
- Ofrezcan opciones y servicios para disfrutar tanto del alojamiento como del entorno.
Genera una consulta de búsqueda optimizada para Google que incluya:
- Términos relevantes para alquileres rurales en la sierra (ej. "casa rural sierra", "cortijo sierra", "alojamiento rural montaña").
- La provincia o ciudad si está especificada.
- Filtro aproximado de precio y capacidad cuando sean relevantes.

Responde SOLO con la consulta optimizada (una sola línea), sin explicaciones adicionales."""

def _num(v: Optional[float]) -> str:
    # 100.0 -> "100", 99.5 -> "99.5", 1500000.0 -> "1500000"
    if v is None:
        return ""
    return str(int(v)) if v.is_integer() else repr(v)

def rule_based_query(query: str, filters: SearchFilters) -> str:
    parts: List[str] = ["casa rural", "alquiler"]
    if filters.location:
        parts.append(filters.location)
    parts += ["sierra", query]
    if filters.price_min or filters.price_max:
        parts.append(f"precio {_num(filters.price_min)}-{_num(filters.price_max)} por noche")
    if filters.guests:
        parts.append(f"para {filters.guests} personas")
    return " ".join(p for p in parts if p)

def build_prompt(query: str, filters: SearchFilters) -> str:
    return PROMPT_TEMPLATE.format(
        query=query,
        location=filters.location or "cualquiera en Andalucía",
        guests=filters.guests if filters.guests is not None else "no especificado",
        price_min=_num(filters.price_min) or "-",
        price_max=_num(filters.price_max) or "-",
    )

def _first_line(text: str) -> str:
    for ln in text.splitlines():
        ln = ln.strip().strip('"').strip()
        if ln:
            return ln
    return ""

def enhance_query(query: str, filters: SearchFilters, model: Optional[TextModel]) -> str:
    if model is None:
        logger.info("Language model not configured; using rule-based enhanced query.")
        return rule_based_query(query, filters)
    try:
        line = _first_line(model.generate(build_prompt(query, filters)))
        if not line:
            raise UpstreamDegraded(model.name, "completion had no usable line")
        return line
    except UpstreamDegraded as e:
        logger.warning("Query enhancement failed, using fallback: %s", e)
    except Exception as e:
        logger.warning("Query enhancement failed unexpectedly, using fallback: %r", e)
    return FALLBACK_TEMPLATE.format(query=query)
