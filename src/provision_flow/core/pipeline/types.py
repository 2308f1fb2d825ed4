# src/provision_flow/core/pipeline/types.py
"""
Tipos canônicos do pipeline do Provision Flow.

Este módulo define as estruturas e enums fundamentais que padronizam
a comunicação entre Steps e Engine.

Componentes principais:
    - StepAction → decisão devolvida por `run` (CONTINUE, HALT)
    - StepState  → máquina de estados observável de um Step na run
    - StepResult → resultado imutável da execução de `run`

Máquina de estados por Step:

    NOT_STARTED -> RUNNING -> {CONTINUED | HALTED}
    RUNNING | CONTINUED | HALTED -> CLEANUP_DONE

Não existe transição de retry dentro de um Step.

Invariantes:
    - Enums possuem valores textuais canônicos
    - StepResult é imutável
    - Um resultado HALT sempre carrega um erro
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

from provision_flow.core.errors import ProvisionErrorPayload


class StepAction(str, Enum):
    """
    Decisão de fluxo devolvida pelo `run` de um Step.

    - CONTINUE: o Engine segue para o próximo Step
    - HALT: o Engine interrompe o avanço e parte para o cleanup

    O valor textual é estável para permitir serialização em eventos.
    """
    CONTINUE = "continue"
    HALT = "halt"


class StepState(str, Enum):
    """
    Estados observáveis de um Step durante uma run.

    Estados definidos:
        - NOT_STARTED: `run` ainda não foi invocado
        - RUNNING: `run` em andamento
        - CONTINUED: `run` terminou com CONTINUE
        - HALTED: `run` terminou com HALT (ou levantou exceção)
        - CLEANUP_DONE: `cleanup` já foi invocado (ver `RunResult.final_state`;
          não sobrescreve o desfecho do `run` em `states`)

    Limites explícitos:
        - Não codifica retry (não existe transição de volta para RUNNING)
    """
    NOT_STARTED = "not_started"
    RUNNING = "running"
    CONTINUED = "continued"
    HALTED = "halted"
    CLEANUP_DONE = "cleanup_done"


@dataclass(frozen=True)
class StepResult:
    """
    Resultado imutável do `run` de um Step.

    Campos:
        - step_id: identificador único do Step
        - action: CONTINUE ou HALT
        - summary: resumo textual da execução
        - error: payload do erro que causou o HALT (None em CONTINUE)
        - payload: dados adicionais livres (ex.: caminhos remotos)

    O erro viaja no resultado; é o Engine quem o registra no RunContext.
    """
    step_id: str
    action: StepAction
    summary: str
    error: Optional[ProvisionErrorPayload] = None
    payload: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.action == StepAction.HALT and self.error is None:
            raise ValueError("StepResult with HALT action requires an error")

    @property
    def halted(self) -> bool:
        return self.action == StepAction.HALT
