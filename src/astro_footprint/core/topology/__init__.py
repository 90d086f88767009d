"""Astro Footprint — Topologia (core).

Resolução de executores, componentes exigidos e overhead de sidecars.
"""

from .executors import (  # noqa: F401
    executor_name,
    find_component,
    resolve_executor,
    sidecar_au,
    sidecar_overhead,
)
