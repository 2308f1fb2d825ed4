"""
Provision Flow: Canonical Exceptions (v1)

Este módulo define exceções tipadas internas do Provision Flow.

Objetivo:
- Permitir que Steps e o cache remoto levantem exceções semânticas tipadas
- Facilitar o mapeamento determinístico para ProvisionErrorPayload
- Evitar RuntimeError genéricos nas fronteiras com o driver remoto

Regras:
- Exceções carregam apenas dados estruturados (serializáveis) em `details`.
- A exceção original do colaborador é preservada via `raise ... from exc`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .errors import (
    CONFIG_PARAMS_ERROR,
    CONFIGURE_ERROR,
    DELETE_ERROR,
    DIRECTORY_CREATE_ERROR,
    ENGINE_CONFIGURATION_ERROR,
    UPLOAD_ERROR,
    VALIDATION_ERROR,
    VOLUME_LOOKUP_ERROR,
    ProvisionErrorPayload,
)


@dataclass(eq=False)
class ProvisionException(Exception):
    """Base class para exceções internas do Provision Flow.

    Importante:
    - Sempre carregar dados estruturados em `details`
    - Mensagem deve ser curta, humana e já conter o contexto da operação
    """

    message: str
    details: Dict[str, Any] = field(default_factory=dict)
    hint: Optional[str] = None

    code = "PROVISION_ERROR"

    def __str__(self) -> str:
        return self.message

    def to_payload(self) -> ProvisionErrorPayload:
        return ProvisionErrorPayload(
            type=self.code,
            message=self.message,
            details=dict(self.details),
            hint=self.hint,
        )


# ---------------------------------------------------------------------------
# Configuração
# ---------------------------------------------------------------------------

@dataclass(eq=False)
class ValidationError(ProvisionException):
    """Configuração inconsistente. Todas as violações vêm em `details["violations"]`."""

    code = VALIDATION_ERROR

    @property
    def violations(self) -> List[str]:
        return list(self.details.get("violations", []))


# ---------------------------------------------------------------------------
# Datastore / cache remoto
# ---------------------------------------------------------------------------

@dataclass(eq=False)
class VolumeLookupError(ProvisionException):
    """Datastore não encontrado (ou ambíguo) para o nome/host informado."""

    code = VOLUME_LOOKUP_ERROR


@dataclass(eq=False)
class DirectoryCreateError(ProvisionException):
    """Falha ao criar o diretório de cache no datastore."""

    code = DIRECTORY_CREATE_ERROR


@dataclass(eq=False)
class UploadError(ProvisionException):
    """Falha no upload do artefato local para o datastore."""

    code = UPLOAD_ERROR


@dataclass(eq=False)
class DeleteError(ProvisionException):
    """Falha ao remover artefato do cache. Apenas em cleanup, nunca fatal."""

    code = DELETE_ERROR


# ---------------------------------------------------------------------------
# Máquina virtual
# ---------------------------------------------------------------------------

@dataclass(eq=False)
class ConfigureError(ProvisionException):
    """Falha na reconfiguração de hardware da VM."""

    code = CONFIGURE_ERROR


@dataclass(eq=False)
class ConfigParamsError(ProvisionException):
    """Falha ao adicionar configuration parameters na VM."""

    code = CONFIG_PARAMS_ERROR


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------

@dataclass(eq=False)
class EngineConfigurationError(ProvisionException):
    """Definição de pipeline inválida (ex.: Step sem id, ids duplicados)."""

    code = ENGINE_CONFIGURATION_ERROR
