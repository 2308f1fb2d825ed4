# src/provision_flow/core/pipeline/__init__.py
"""
# Pipeline Core: Provision Flow

Contratos canônicos de um pipeline de provisionamento: uma sequência
linear de Steps, cada um com `run` e `cleanup`, cooperando sobre um único
`RunContext`.

## Componentes

- **types**: `StepAction`, `StepState`, `StepResult`
- **step**: `Step` (Protocol)
- **context**: `RunContext` (State Bag tipado), `new_run_context`
- **registry**: `StepRegistry`

## Princípios

- Steps não conhecem o Engine
- Comunicação entre Steps ocorre apenas via `RunContext`
- Não há ramificação, laço ou DAG: a ordem de registro é a ordem de execução
"""

from .context import MissingStateError, RunContext, new_run_context
from .registry import DuplicateStepIdError, StepRegistry
from .step import Step
from .types import StepAction, StepResult, StepState

__all__ = [
    "DuplicateStepIdError",
    "MissingStateError",
    "RunContext",
    "Step",
    "StepAction",
    "StepRegistry",
    "StepResult",
    "StepState",
    "new_run_context",
]
