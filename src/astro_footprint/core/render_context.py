# src/astro_footprint/core/render_context.py
"""
RenderContext — contexto canônico de uma composição de values.

O RenderContext acompanha uma única chamada ao Values Composer e é o
**único meio** pelo qual o core registra:

- logs estruturados por camada de composição
- warnings não fatais associados a uma camada

O contexto é opcional: a composição produz exatamente o mesmo documento
com ou sem ele. O processo que hospeda o engine (fora do core) decide
para onde encaminhar `events`.

Princípios fundamentais:
- Isolamento por composição (cada chamada possui seu próprio contexto)
- Nenhum estado global de logging
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List


@dataclass
class RenderContext:
    """
    Contexto de uma composição de values.

    Campos canônicos:
    - render_id: identificador da composição (ex.: release name + timestamp)
    - created_at: timestamp UTC de criação do contexto
    - meta: metadados livres do chamador
    - warnings: warnings por camada
    - events: log estruturado de eventos
    """

    render_id: str
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    meta: Dict[str, Any] = field(default_factory=dict)
    warnings: Dict[str, List[str]] = field(default_factory=dict)
    events: List[Dict[str, Any]] = field(default_factory=list)

    # -----------------------------
    # Logging & warnings
    # -----------------------------
    def log(self, *, layer: str, level: str, message: str, **extra: Any) -> None:
        event = {
            "render_id": self.render_id,
            "layer": layer,
            "level": level,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        event.update(extra)
        self.events.append(event)

    def add_warning(self, *, layer: str, message: str) -> None:
        if layer not in self.warnings:
            self.warnings[layer] = []
        self.warnings[layer].append(message)

    def events_for(self, layer: str) -> List[Dict[str, Any]]:
        return [e for e in self.events if e["layer"] == layer]
