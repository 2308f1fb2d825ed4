# src/provision_flow/core/config/errors.py
"""
Exceções da camada de configuração do Provision Flow.

Estas exceções representam falhas estruturais ao carregar ou mesclar
arquivos de build. Falhas semânticas (ex.: firmware inválido) são
`ValidationError`, coletadas por `BuildConfig.prepare`.

Invariantes:
    - Todas as exceções de configuração herdam de `ConfigError`
"""


class ConfigError(Exception):
    """Base para erros de carregamento/merge de configuração."""


class DefaultsNotFoundError(ConfigError):
    """
    O arquivo base da build não existe no caminho especificado.

    O arquivo de defaults é obrigatório; o override local é opcional.
    """


class UnsupportedConfigFormatError(ConfigError):
    """
    Extensão de arquivo não suportada.

    Formatos suportados (v1):
        - YAML (.yaml, .yml)
        - JSON (.json)
    """


class InvalidConfigRootTypeError(ConfigError):
    """O conteúdo raiz do arquivo não é um mapa chave-valor."""


class ConfigTypeConflictError(ConfigError):
    """
    Conflito de tipos durante o deep-merge.

    Exemplo:
        - base:     {"hardware": {"RAM": 4096}}
        - override: {"hardware": "big"}
    """
