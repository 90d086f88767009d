"""Astro Footprint — Values (core).

 - layers: ingress, registry e Elasticsearch
 - composer: composição ordenada do documento final de values
"""

from .composer import generate_helm_values, helm_value_layers  # noqa: F401
from .layers import elasticsearch, ingress, registry  # noqa: F401
