# src/provision_flow/__init__.py
"""
Provision Flow: pipeline de provisionamento de máquinas virtuais.

Uma build é uma sequência linear de Steps que cooperam sobre um único
RunContext para provisionar e configurar uma VM numa plataforma de
virtualização remota:

    remote.upload → vm.hardware → vm.config_params

Princípios centrais:
    - Cada Step tem `run` (CONTINUE/HALT) e `cleanup` (sempre executado)
    - O primeiro erro interrompe a run e nunca é mascarado por falhas de cleanup
    - Artefatos enviados ao datastore são reaproveitados entre runs

Arquitetura em alto nível:
    - core.config   → carregamento, merge e hashing da configuração
    - core.pipeline → protocolo de Step, RunContext e registry
    - core.engine   → driver do pipeline
    - remote        → contratos do driver, endereçamento e cache de artefatos
    - steps         → Steps concretos
    - build         → configuração de build → pipeline
"""

from .build import BuildConfig, build_steps, load_build_config, run_build
from .core.engine import Engine, RunResult
from .core.pipeline import RunContext, StepAction, StepResult, StepState, new_run_context

__all__ = [
    "BuildConfig",
    "Engine",
    "RunContext",
    "RunResult",
    "StepAction",
    "StepResult",
    "StepState",
    "build_steps",
    "load_build_config",
    "new_run_context",
    "run_build",
]
