# src/provision_flow/core/__init__.py
"""
Core do Provision Flow.

Componentes principais:
    - config    → carregamento, merge e hashing da configuração de build
    - pipeline  → protocolo de Step, RunContext (State Bag) e registry
    - engine    → execução linear com halt e cleanup reverso
    - errors / exceptions → taxonomia de erros da run

Limites explícitos:
    - Não conhece vSphere nem qualquer plataforma concreta
    - Não define Steps de domínio
"""
