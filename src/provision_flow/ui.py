# src/provision_flow/ui.py
"""
Saída para o usuário (output sink).

`Ui` é o contrato mínimo consumido pelo pipeline: mensagens de progresso
(`say`) e a mensagem do erro que interrompeu a run (`error`). Nenhum dos
dois métodos pode falhar a run.
"""

from __future__ import annotations

import sys
from typing import Optional, Protocol, TextIO, runtime_checkable


@runtime_checkable
class Ui(Protocol):
    def say(self, message: str) -> None:
        ...

    def error(self, message: str) -> None:
        ...


class StreamUi:
    """Ui que escreve em streams de texto (stdout/stderr por padrão)."""

    def __init__(self, out: Optional[TextIO] = None, err: Optional[TextIO] = None, prefix: str = "==> "):
        self.out = out if out is not None else sys.stdout
        self.err = err if err is not None else sys.stderr
        self.prefix = prefix

    def say(self, message: str) -> None:
        self.out.write(f"{self.prefix}{message}\n")
        self.out.flush()

    def error(self, message: str) -> None:
        self.err.write(f"{self.prefix}{message}\n")
        self.err.flush()
