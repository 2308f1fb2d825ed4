"""
Provision Flow: Canonical Error Structures (v1)

Este módulo define o padrão canônico de erros do Provision Flow.

Erros de uma run de provisionamento fazem parte do contrato operacional
entre Steps, Engine e chamador, devendo ser:
- explícitos
- serializáveis
- rastreáveis
- acionáveis

O erro que interrompe a run (halt) é registrado uma única vez no RunContext
e nunca é sobrescrito por falhas secundárias de cleanup.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional


# ---------------------------------------------------------------------------
# Payload canônico
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ProvisionErrorPayload:
    """
    Payload canônico de erro do Provision Flow.

    Campos:
    - type: código estável do erro (não é texto livre)
    - message: mensagem curta, humana e objetiva (já com contexto do Step)
    - details: dados estruturados relevantes para diagnóstico
    - hint: ação sugerida ao operador (onde corrigir)
    """

    type: str
    message: str
    details: Dict[str, Any]
    hint: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Retorna representação serializável do erro."""
        return asdict(self)


# ---------------------------------------------------------------------------
# Catálogo canônico de tipos de erro (v1)
# ---------------------------------------------------------------------------

# Configuração
VALIDATION_ERROR = "VALIDATION_ERROR"

# Datastore / cache remoto
VOLUME_LOOKUP_ERROR = "VOLUME_LOOKUP_ERROR"
DIRECTORY_CREATE_ERROR = "DIRECTORY_CREATE_ERROR"
UPLOAD_ERROR = "UPLOAD_ERROR"
DELETE_ERROR = "DELETE_ERROR"

# Máquina virtual
CONFIGURE_ERROR = "CONFIGURE_ERROR"
CONFIG_PARAMS_ERROR = "CONFIG_PARAMS_ERROR"

# Engine / Execução
ENGINE_EXECUTION_ERROR = "ENGINE_EXECUTION_ERROR"
ENGINE_CONFIGURATION_ERROR = "ENGINE_CONFIGURATION_ERROR"


def engine_execution_error(
    *,
    step: Optional[str] = None,
    exc_type: Optional[str] = None,
    exc_message: Optional[str] = None,
    hint: str = "Verifique o event log da run para diagnosticar a falha. Nenhum retry é aplicado automaticamente.",
) -> ProvisionErrorPayload:
    return ProvisionErrorPayload(
        type=ENGINE_EXECUTION_ERROR,
        message=exc_message or "Falha inesperada durante a execução do pipeline",
        details={
            "step": step,
            "exc_type": exc_type,
            "exc_message": exc_message,
        },
        hint=hint,
    )


def engine_configuration_error(
    *,
    message: str = "Configuração inválida para execução do pipeline",
    details: Optional[Dict[str, Any]] = None,
    hint: str = "Revise a definição dos Steps antes de reexecutar.",
) -> ProvisionErrorPayload:
    return ProvisionErrorPayload(
        type=ENGINE_CONFIGURATION_ERROR,
        message=message,
        details=details or {},
        hint=hint,
    )


def payload_from_exception(exc: BaseException, *, step: Optional[str] = None) -> ProvisionErrorPayload:
    """
    Converte uma exceção no payload canônico.

    - ProvisionException: usa o próprio código/mensagem/hint (`to_payload`)
    - qualquer outra: ENGINE_EXECUTION_ERROR com tipo e mensagem originais

    Quando `step` é informado, entra em `details["step"]` sem sobrescrever
    um valor já definido pela exceção.
    """
    # import local: exceptions.py depende deste módulo
    from provision_flow.core.exceptions import ProvisionException

    if not isinstance(exc, ProvisionException):
        return engine_execution_error(
            step=step,
            exc_type=exc.__class__.__name__,
            exc_message=str(exc) or None,
        )

    payload = exc.to_payload()
    if step is None:
        return payload
    details = dict(payload.details)
    details.setdefault("step", step)
    return ProvisionErrorPayload(
        type=payload.type,
        message=payload.message,
        details=details,
        hint=payload.hint,
    )
