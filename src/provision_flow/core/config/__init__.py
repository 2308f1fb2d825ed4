# src/provision_flow/core/config/__init__.py
"""
Camada de configuração do Provision Flow.

Responsabilidades do pacote:
    - Carregamento de arquivos de build (defaults + overrides locais), YAML ou JSON
    - Resolução da configuração final via deep-merge determinístico
    - Hash canônico da configuração efetiva para rastreabilidade da run

Limites explícitos:
    - Não valida semântica de hardware nem de datastore (ver `provision_flow.build`)
    - Não executa pipeline
"""

from .errors import (
    ConfigError,
    ConfigTypeConflictError,
    DefaultsNotFoundError,
    InvalidConfigRootTypeError,
    UnsupportedConfigFormatError,
)
from .hashing import compute_config_hash
from .loader import load_config
from .merge import deep_merge

__all__ = [
    "ConfigError",
    "ConfigTypeConflictError",
    "DefaultsNotFoundError",
    "InvalidConfigRootTypeError",
    "UnsupportedConfigFormatError",
    "compute_config_hash",
    "deep_merge",
    "load_config",
]
