# src/provision_flow/remote/addressing.py
"""
Endereçamento canônico de artefatos no cache remoto.

Dado um caminho local e o nome do datastore, o artefato vive sempre em
`<cache_root>/<basename>` nesse datastore. A derivação é pura: não faz
I/O e não depende de estado externo, de modo que entradas iguais produzem
sempre a mesma referência. É isso que torna o cache correto entre runs.
"""

from __future__ import annotations

import ntpath
import posixpath
from typing import NamedTuple

CACHE_ROOT = "packer_cache"


class RemoteArtifactRef(NamedTuple):
    """Referência remota derivada de um artefato local."""

    base_name: str
    remote_path: str
    remote_directory: str
    full_remote_path: str


def _base_name(local_path: str) -> str:
    # Aceita separadores POSIX e Windows independentemente da plataforma.
    # Separadores finais são ignorados: "/tmp/dir/" -> "dir".
    stripped = local_path.rstrip("/\\")
    if not stripped:
        return local_path[:1] or "."
    return ntpath.basename(posixpath.basename(stripped))


def derive_remote_path(local_path: str, volume_name: str, cache_root: str = CACHE_ROOT) -> RemoteArtifactRef:
    """
    Deriva a referência remota de `local_path` no datastore `volume_name`.

    Exemplo: ("/tmp/x.iso", "datastore1") produz
        base_name        = "x.iso"
        remote_path      = "packer_cache/x.iso"
        remote_directory = "[datastore1] packer_cache"
        full_remote_path = "[datastore1] packer_cache/x.iso"
    """
    base_name = _base_name(local_path)
    remote_path = f"{cache_root}/{base_name}"
    remote_directory = f"[{volume_name}] {cache_root}"
    full_remote_path = f"{remote_directory}/{base_name}"
    return RemoteArtifactRef(base_name, remote_path, remote_directory, full_remote_path)
