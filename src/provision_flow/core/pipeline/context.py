# src/provision_flow/core/pipeline/context.py
"""
Contexto de execução compartilhado do pipeline (State Bag).

Este módulo define o `RunContext`, a estrutura canônica utilizada para
compartilhar estado explícito entre Steps durante uma run de
provisionamento.

Ao contrário de um mapa chave→valor sem tipo, os valores trocados entre
Steps são campos tipados e documentados. A tabela abaixo é o contrato
entre produtores e consumidores:

    campo                 produtor                     consumidores
    --------------------  ---------------------------  --------------------------------
    ui                    chamador                     todos os Steps, Engine
    driver                chamador                     RemoteUploadStep (run/cleanup)
    vm                    chamador / Step anterior     ConfigureHardwareStep,
                                                       ConfigParamsStep
    error                 Engine (primeiro halt)       chamador
    cancelled             cancel() / Engine            Engine, cleanups
    halted                Engine                       cleanups
    iso_path              chamador                     RemoteUploadStep
    iso_remote_path       RemoteUploadStep             Steps seguintes
    cd_path               chamador (caminho local);    RemoteUploadStep.cleanup
                          RemoteUploadStep reescreve
                          com o caminho remoto
    remote_cache_cleanup  RemoteUploadStep             RemoteUploadStep.cleanup

Flags efêmeras de um Step (ex.: "o CD foi enviado nesta run") vivem em
`set_step_flag`/`get_step_flag`, escopadas pelo `step_id`, e só existem
durante a run.

Invariantes:
    - Cada run possui seu próprio RunContext
    - Um campo obrigatório ausente é erro de programação (`MissingStateError`)
    - O erro que interrompeu a run é registrado uma única vez
    - Logs sempre incluem `run_id` e `step_id`

Limites explícitos:
    - Não executa Steps
    - Não persiste dados
    - Não é thread-safe (a run é sequencial)
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from provision_flow.core.config.hashing import compute_config_hash
from provision_flow.core.errors import ProvisionErrorPayload

if TYPE_CHECKING:  # pragma: no cover
    from provision_flow.remote.driver import Driver, VirtualMachine
    from provision_flow.ui import Ui


class MissingStateError(KeyError):
    """Campo obrigatório do RunContext não foi preenchido por nenhum produtor."""


@dataclass
class RunContext:
    """
    Contexto de execução compartilhado de uma run de provisionamento.

    Campos canônicos:
    - run_id: identificador único da execução
    - created_at: timestamp UTC (ISO 8601) de criação do contexto
    - config: configuração efetiva da build
    - meta: metadados de execução (ex.: config_hash)
    - ui / driver / vm: colaboradores externos
    - error / cancelled / halted: marcadores de desfecho da run
    - iso_path / iso_remote_path / cd_path / remote_cache_cleanup: troca entre Steps
    """

    run_id: str
    created_at: str
    config: Dict[str, Any] = field(default_factory=dict)
    meta: Dict[str, Any] = field(default_factory=dict)

    # Colaboradores
    ui: Optional["Ui"] = None
    driver: Optional["Driver"] = None
    vm: Optional["VirtualMachine"] = None

    # Desfecho
    error: Optional[ProvisionErrorPayload] = None
    cancelled: bool = False
    halted: bool = False

    # Troca entre Steps
    iso_path: Optional[str] = None
    iso_remote_path: Optional[str] = None
    cd_path: Optional[str] = None
    remote_cache_cleanup: bool = False

    warnings: Dict[str, List[str]] = field(default_factory=dict)
    events: List[Dict[str, Any]] = field(default_factory=list)

    _step_flags: Dict[str, Dict[str, Any]] = field(default_factory=dict, repr=False)

    # -----------------------------
    # Acesso obrigatório
    # -----------------------------
    def require(self, name: str) -> Any:
        value = getattr(self, name)
        if value is None:
            raise MissingStateError(name)
        return value

    # -----------------------------
    # Desfecho da run
    # -----------------------------
    def cancel(self) -> None:
        """Sinal cooperativo: observado pelo Engine entre Steps e pelos cleanups."""
        self.cancelled = True

    def record_error(self, error: ProvisionErrorPayload) -> bool:
        """Registra o erro da run. O primeiro erro vence; retorna False se já havia um."""
        if self.error is not None:
            return False
        self.error = error
        return True

    # -----------------------------
    # Flags por Step
    # -----------------------------
    def set_step_flag(self, step_id: str, name: str, value: Any) -> None:
        self._step_flags.setdefault(step_id, {})[name] = value

    def get_step_flag(self, step_id: str, name: str, default: Any = None) -> Any:
        return self._step_flags.get(step_id, {}).get(name, default)

    # -----------------------------
    # Saída para o usuário, logging & warnings
    # -----------------------------
    def say(self, *, step_id: str, message: str) -> None:
        """Mensagem de progresso para o usuário; também entra no event log."""
        if self.ui is not None:
            self.ui.say(message)
        self.log(step_id=step_id, level="info", message=message)

    def log(self, *, step_id: str, level: str, message: str, **extra: Any) -> None:
        event = {
            "run_id": self.run_id,
            "step_id": step_id,
            "level": level,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        event.update(extra)
        self.events.append(event)

    def add_warning(self, *, step_id: str, message: str) -> None:
        if step_id not in self.warnings:
            self.warnings[step_id] = []
        self.warnings[step_id].append(message)


def new_run_context(
    *,
    config: Optional[Dict[str, Any]] = None,
    ui: Optional["Ui"] = None,
    driver: Optional["Driver"] = None,
    vm: Optional["VirtualMachine"] = None,
    run_id: Optional[str] = None,
) -> RunContext:
    """Cria um RunContext novo, com `config_hash` da configuração efetiva em `meta`."""
    effective = dict(config or {})
    ctx = RunContext(
        run_id=run_id or uuid.uuid4().hex,
        created_at=datetime.now(timezone.utc).isoformat(),
        config=effective,
        meta={"config_hash": compute_config_hash(effective)},
        ui=ui,
        driver=driver,
        vm=vm,
    )

    iso_path = effective.get("iso_path")
    if isinstance(iso_path, str) and iso_path:
        ctx.iso_path = iso_path
    cd_path = effective.get("cd_path")
    if isinstance(cd_path, str) and cd_path:
        ctx.cd_path = cd_path

    return ctx
