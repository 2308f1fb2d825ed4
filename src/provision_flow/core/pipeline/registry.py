# src/provision_flow/core/pipeline/registry.py
"""
Registro estrutural de Steps do pipeline.

O `StepRegistry` valida a integridade estrutural do pipeline antes da
execução: cada Step precisa de um `id` não vazio e único, e a ordem de
registro é exatamente a ordem de execução (pipeline linear).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

from provision_flow.core.exceptions import EngineConfigurationError

from .step import Step


class DuplicateStepIdError(EngineConfigurationError):
    """Dois Steps registrados com o mesmo `step.id`."""


@dataclass
class StepRegistry:
    """
    Registro ordenado de Steps com unicidade de `step.id`.

    Invariantes:
        - Cada `step.id` é único no registry
        - A lista de Steps reflete exatamente a ordem de registro
    """

    _steps: Dict[str, Step] = field(default_factory=dict, init=False, repr=False)
    _order: List[str] = field(default_factory=list, init=False, repr=False)

    def add(self, step: Step) -> None:
        step_id = getattr(step, "id", None)
        if not isinstance(step_id, str) or not step_id.strip():
            raise EngineConfigurationError(
                message="step.id must be a non-empty string",
                details={"step": repr(step)},
            )

        if not callable(getattr(step, "run", None)) or not callable(getattr(step, "cleanup", None)):
            raise EngineConfigurationError(
                message=f"Step {step_id} must implement run(ctx) and cleanup(ctx)",
                details={"step_id": step_id},
            )

        if step_id in self._steps:
            raise DuplicateStepIdError(
                message=f"Duplicate step id: {step_id}",
                details={"step_id": step_id},
            )

        self._steps[step_id] = step
        self._order.append(step_id)

    def get(self, step_id: str) -> Step:
        return self._steps[step_id]

    def list(self) -> List[Step]:
        return [self._steps[sid] for sid in self._order]
