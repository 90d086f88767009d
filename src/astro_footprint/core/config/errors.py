# src/astro_footprint/core/config/errors.py
"""
Exceções canônicas da camada de configuração do Astro Footprint.

Este módulo define a hierarquia oficial de exceções utilizadas durante
o carregamento do catálogo estático e a resolução de documentos de
values via deep-merge.

As exceções aqui definidas representam **violações estruturais
explícitas** da configuração, e não erros de cálculo de recursos (estes
vivem em `astro_footprint.core.exceptions`).

Invariantes:
    - Todas as exceções de configuração herdam de `ConfigError`
    - Nenhuma exceção é tratada com fallback ou recovery

Limites explícitos:
    - Não representa erro de domínio de recursos
    - Não depende de Kubernetes, Helm ou camada de transporte
"""


class ConfigError(Exception):
    """
    Exceção base para erros relacionados à configuração do Astro Footprint.

    Todas as exceções levantadas durante carregamento de arquivos e
    resolução de configuração devem herdar desta classe, permitindo
    captura genérica de falhas estruturais.
    """


class DefaultsNotFoundError(ConfigError):
    """
    Exceção levantada quando o arquivo de configuração base (defaults)
    não é encontrado no caminho especificado.

    Decisões arquiteturais:
        - O arquivo de defaults é obrigatório
        - Sem defaults não existe catálogo estático válido

    Limites explícitos:
        - Não tenta inferir ou criar defaults automaticamente
    """


class UnsupportedConfigFormatError(ConfigError):
    """
    Exceção levantada quando o formato do arquivo de configuração
    não é suportado pelo loader.

    Formatos suportados (v1):
        - YAML (.yaml, .yml)
        - JSON (.json)
    """


class InvalidConfigRootTypeError(ConfigError):
    """
    Exceção levantada quando o conteúdo raiz da configuração
    não é um dicionário (`dict`).

    Listas ou valores escalares no root são inválidos e não são
    encapsulados automaticamente.
    """


class ConfigTypeConflictError(ConfigError):
    """
    Exceção levantada quando ocorre conflito de tipos durante o deep-merge.

    Este erro indica que uma mesma chave possui tipos estruturalmente
    incompatíveis entre duas camadas do documento de values.

    Exemplo de conflito:
        - base:     {"workers": {"persistence": {"enabled": true}}}
        - override: {"workers": "disabled"}

    Decisões arquiteturais:
        - Um mapa nunca é sobrescrito por um escalar (e vice-versa)
        - Números (int/float) são intercambiáveis entre camadas
        - `None` é tratado como ausência de valor

    Invariantes:
        - Nenhum merge parcial é produzido em caso de conflito
    """
