# src/astro_footprint/core/__init__.py
"""
Core do Astro Footprint.

Este pacote contém o engine de configuração de recursos de deployments
do Airflow: a transformação determinística e sem efeitos colaterais de
(registro do deployment, catálogo estático) para o documento final de
values consumido pelo chart Helm.

O core é projetado para ser:
    - determinístico
    - puro (nenhuma chamada a Kubernetes, Helm ou persistência)
    - testável de forma isolada

Componentes principais:
    - config      → carregamento, deep-merge e hashing de configuração
    - catalog     → schema e validação do catálogo estático
    - resources   → conversão AU → recursos e defaults por componente
    - topology    → executores, componentes exigidos e sidecars
    - constraints → quotas, LimitRange e pool do pgbouncer
    - overrides   → normalização dos overrides do deployment
    - values      → composição ordenada do documento final

Limites explícitos:
    - Não decide quando regenerar a configuração
    - Não contém camada de transporte, autenticação ou persistência
"""
