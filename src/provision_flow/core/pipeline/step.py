# src/provision_flow/core/pipeline/step.py
"""
Contrato canônico de Step do Provision Flow.

Um Step é uma etapa discreta do provisionamento, composta por duas metades:

    - `run(ctx)`: pode mutar o RunContext e devolve um StepResult
      (CONTINUE ou HALT). Falhas internas viram HALT com erro, nunca
      exceções que derrubem o processo.
    - `cleanup(ctx)`: sempre invocado pelo Engine para todo Step cujo
      `run` foi iniciado, em ordem reversa, qualquer que tenha sido o
      desfecho da run (sucesso, halt ou cancelamento).

O cleanup deve ser idempotente e defensivo: inspeciona `ctx.cancelled`,
`ctx.halted` e as flags do próprio Step para decidir se há algo a desfazer,
e é um no-op quando `run` não chegou a realizar nenhuma ação.

Conformidade é verificada por duck typing (@runtime_checkable).
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from .context import RunContext
from .types import StepResult


@runtime_checkable
class Step(Protocol):
    """
    Contrato mínimo de um Step executável pelo Engine.

    Atributos obrigatórios:
        - id: identificador único e estável do Step

    Invariantes:
        - `run` é executado no máximo uma vez por run
        - `cleanup` é executado exatamente uma vez para cada `run` iniciado
        - Erros de `cleanup` nunca escalam para falha do pipeline
    """
    id: str

    def run(self, ctx: RunContext) -> StepResult:
        """Executa a etapa uma única vez usando exclusivamente o RunContext."""
        ...

    def cleanup(self, ctx: RunContext) -> None:
        """Desfaz, se necessário, o que `run` fez nesta run."""
        ...
