# src/provision_flow/core/engine/__init__.py
"""
Engine do Provision Flow.

O Engine é o driver do pipeline: executa os Steps em ordem, para no
primeiro HALT (ou ao observar cancelamento entre Steps) e sempre executa
o cleanup de cada Step iniciado, em ordem reversa.

Invariantes:
    - Cada Step é executado no máximo uma vez por run
    - Todo Step iniciado recebe exatamente um `cleanup`
    - Falhas de cleanup nunca alteram o erro que interrompeu a run

Limites explícitos:
    - Não faz retry
    - Não executa Steps em paralelo
"""

from .engine import Engine, RunResult

__all__ = ["Engine", "RunResult"]
