# src/provision_flow/core/engine/engine.py
"""
Engine de execução do pipeline do Provision Flow.

Protocolo de execução:
- Os Steps rodam sequencialmente, na ordem de registro.
- Antes de cada Step o Engine verifica `ctx.cancelled`; se marcado, não
  inicia mais nenhum Step.
- Um `run` que devolve HALT, ou que levanta exceção, interrompe o avanço:
  o Engine marca `ctx.halted`, registra o erro (apenas o primeiro) e
  exibe a mensagem na ui.
- `KeyboardInterrupt` durante um Step é tratado como cancelamento: o
  cleanup roda normalmente e a interrupção é repropagada ao final.
- O cleanup roda para todos os Steps iniciados, em ordem reversa. Exceções
  de cleanup viram warnings no event log e nunca interrompem o cleanup dos
  demais Steps.
- `states` guarda o desfecho do `run` de cada Step; o cleanup é registrado
  à parte em `cleaned_up` (ordem de execução) e nunca apaga esse desfecho.

Guardrails (exceção -> ProvisionErrorPayload):
- ProvisionException: já carrega código, mensagem, details e hint.
- Outras exceções: encapsuladas como ENGINE_EXECUTION_ERROR.
- `run` devolvendo algo que não é StepResult: ENGINE_CONFIGURATION_ERROR.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from provision_flow.core.errors import (
    ProvisionErrorPayload,
    engine_configuration_error,
    payload_from_exception,
)
from provision_flow.core.pipeline.context import RunContext
from provision_flow.core.pipeline.registry import StepRegistry
from provision_flow.core.pipeline.step import Step
from provision_flow.core.pipeline.types import StepAction, StepResult, StepState

ENGINE_STEP_ID = "engine"


@dataclass(frozen=True)
class RunResult:
    """Resultado agregado de uma run de provisionamento."""

    results: Dict[str, StepResult] = field(default_factory=dict)
    states: Dict[str, StepState] = field(default_factory=dict)
    cleaned_up: Tuple[str, ...] = ()
    error: Optional[ProvisionErrorPayload] = None
    cancelled: bool = False
    halted: bool = False

    @property
    def succeeded(self) -> bool:
        return not self.cancelled and not self.halted and self.error is None

    def final_state(self, step_id: str) -> StepState:
        """Estado final do Step: CLEANUP_DONE se o cleanup rodou, senão o desfecho do `run`."""
        if step_id in self.cleaned_up:
            return StepState.CLEANUP_DONE
        return self.states[step_id]


class Engine:
    """Driver canônico do pipeline (linear, halt-on-error, cleanup reverso)."""

    def __init__(self, *, steps: Sequence[Step], ctx: RunContext):
        registry = StepRegistry()
        for step in steps:
            registry.add(step)
        self.steps: List[Step] = registry.list()
        self.ctx: RunContext = ctx
        self.states: Dict[str, StepState] = {s.id: StepState.NOT_STARTED for s in self.steps}
        self.cleaned_up: List[str] = []

    # ------------------------------------------------------------------
    # Guardrails: exceção -> ProvisionErrorPayload
    # ------------------------------------------------------------------
    def _exception_to_error(self, step_id: str, exc: Exception) -> ProvisionErrorPayload:
        return payload_from_exception(exc, step=step_id)

    def _run_step(self, step: Step) -> StepResult:
        sid = step.id
        try:
            result = step.run(self.ctx)
        except Exception as e:
            error = self._exception_to_error(sid, e)
            self.ctx.log(
                step_id=sid,
                level="error",
                message="step raised",
                error_type=e.__class__.__name__,
                error_message=str(e) or "error",
            )
            return StepResult(step_id=sid, action=StepAction.HALT, summary=error.message, error=error)

        if not isinstance(result, StepResult):
            error = engine_configuration_error(
                message="Step retornou tipo inválido",
                details={
                    "step_id": sid,
                    "expected": "StepResult",
                    "received": type(result).__name__,
                },
                hint="Ajuste o Step para retornar StepResult",
            )
            return StepResult(step_id=sid, action=StepAction.HALT, summary=error.message, error=error)

        return result

    def _halt(self, result: StepResult) -> None:
        # StepResult garante erro em todo HALT
        error = result.error
        self.ctx.halted = True
        if self.ctx.record_error(error):
            if self.ctx.ui is not None:
                self.ctx.ui.error(error.message)
        self.ctx.log(
            step_id=result.step_id,
            level="error",
            message="pipeline halted",
            error_type=error.type,
            error_message=error.message,
        )

    def _cleanup(self, started: List[Step]) -> None:
        for step in reversed(started):
            sid = step.id
            try:
                step.cleanup(self.ctx)
            except Exception as e:
                msg = f"cleanup of {sid} failed: {e}"
                self.ctx.add_warning(step_id=sid, message=msg)
                self.ctx.log(
                    step_id=sid,
                    level="warning",
                    message=msg,
                    error_type=e.__class__.__name__,
                )
            self.cleaned_up.append(sid)

    def run(self) -> RunResult:
        results: Dict[str, StepResult] = {}
        started: List[Step] = []

        try:
            for step in self.steps:
                if self.ctx.cancelled:
                    self.ctx.log(step_id=ENGINE_STEP_ID, level="info", message="run cancelled")
                    break

                sid = step.id
                started.append(step)
                self.states[sid] = StepState.RUNNING

                try:
                    result = self._run_step(step)
                except KeyboardInterrupt:
                    self.states[sid] = StepState.HALTED
                    self.ctx.cancel()
                    self.ctx.log(step_id=sid, level="warning", message="run interrupted")
                    raise

                results[sid] = result

                if result.halted:
                    self.states[sid] = StepState.HALTED
                    self._halt(result)
                    break

                self.states[sid] = StepState.CONTINUED
        finally:
            self._cleanup(started)

        return RunResult(
            results=results,
            states=dict(self.states),
            cleaned_up=tuple(self.cleaned_up),
            error=self.ctx.error,
            cancelled=self.ctx.cancelled,
            halted=self.ctx.halted,
        )
