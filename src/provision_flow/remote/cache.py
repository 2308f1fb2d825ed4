# src/provision_flow/remote/cache.py
"""
Cache remoto de artefatos.

`RemoteArtifactCache.ensure_uploaded` garante que um artefato local exista
no local canônico do datastore exatamente uma vez:

    1. resolve o datastore (nome + host)       -> VolumeLookupError
    2. deriva a referência remota canônica
    3. se o objeto já existe: retorna sem upload e sem checar diretório
       (falha na checagem                       -> VolumeLookupError)
    4. cria o diretório de cache se ausente    -> VolumeLookupError na checagem,
                                                  DirectoryCreateError na criação
    5. faz o upload (afinidade de host opcional) -> UploadError
    6. retorna o caminho remoto completo com `uploaded=True`

A checagem de existência em (3) é o que substitui lock entre runs: tentar
o upload de novo é seguro porque a existência é sempre reavaliada antes.

`remove_uploaded` é usado apenas em cleanup: falhas são registradas como
warning no event log e nunca propagadas.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from provision_flow.core.exceptions import (
    DeleteError,
    DirectoryCreateError,
    UploadError,
    VolumeLookupError,
)
from provision_flow.core.pipeline.context import RunContext

from .addressing import CACHE_ROOT, derive_remote_path
from .driver import Driver, Volume


@dataclass(frozen=True)
class UploadOutcome:
    full_remote_path: str
    uploaded: bool


class RemoteArtifactCache:
    def __init__(self, driver: Driver, *, ctx: Optional[RunContext] = None, step_id: str = "remote.cache",
                 cache_root: str = CACHE_ROOT):
        self.driver = driver
        self.ctx = ctx
        self.step_id = step_id
        self.cache_root = cache_root

    def _say(self, message: str) -> None:
        if self.ctx is not None:
            self.ctx.say(step_id=self.step_id, message=message)

    def _log(self, level: str, message: str, **extra) -> None:
        if self.ctx is not None:
            self.ctx.log(step_id=self.step_id, level=level, message=message, **extra)

    def find_volume(self, volume_name: str, host: str) -> Volume:
        try:
            return self.driver.find_volume(volume_name, host)
        except Exception as e:
            raise VolumeLookupError(
                message=f"error finding the datastore: {e}",
                details={"datastore": volume_name, "host": host},
                hint="Verifique o nome do datastore e o host informados na build.",
            ) from e

    def ensure_uploaded(
        self,
        local_path: str,
        volume_name: str,
        host: str = "",
        set_host: bool = False,
    ) -> UploadOutcome:
        volume = self.find_volume(volume_name, host)
        ref = derive_remote_path(local_path, volume.name, self.cache_root)

        try:
            exists = volume.exists(ref.remote_path)
        except Exception as e:
            raise VolumeLookupError(
                message=f"error checking {ref.full_remote_path} in the datastore: {e}",
                details={"datastore": volume.name, "remote_path": ref.remote_path},
            ) from e

        if exists:
            self._say(f"File {ref.full_remote_path} already exists; skipping upload...")
            return UploadOutcome(full_remote_path=ref.full_remote_path, uploaded=False)

        self._say(f"Uploading {ref.base_name} to {ref.remote_directory}...")

        try:
            directory_exists = volume.directory_exists(self.cache_root)
        except Exception as e:
            raise VolumeLookupError(
                message=f"error checking the cache directory {ref.remote_directory}: {e}",
                details={"datastore": volume.name, "directory": ref.remote_directory},
            ) from e

        if not directory_exists:
            self._log("info", f"Cache directory does not exist; creating {ref.remote_directory}...")
            try:
                volume.make_directory(ref.remote_directory)
            except Exception as e:
                raise DirectoryCreateError(
                    message=f"error creating the cache directory {ref.remote_directory}: {e}",
                    details={"datastore": volume.name, "directory": ref.remote_directory},
                ) from e

        try:
            volume.upload(local_path, ref.remote_path, host, set_host)
        except Exception as e:
            raise UploadError(
                message=f"error uploading {ref.base_name} to {ref.remote_directory}: {e}",
                details={
                    "datastore": volume.name,
                    "local_path": local_path,
                    "remote_path": ref.remote_path,
                    "host": host,
                    "set_host": set_host,
                },
            ) from e

        self._log("info", "artifact uploaded", full_remote_path=ref.full_remote_path)
        return UploadOutcome(full_remote_path=ref.full_remote_path, uploaded=True)

    def remove_uploaded(self, full_remote_path: str, volume_name: str, host: str = "") -> bool:
        """Remove um artefato do cache. Retorna False (sem levantar) em qualquer falha."""
        self._say(f"Removing {full_remote_path}...")

        try:
            volume = self.find_volume(volume_name, host)
        except VolumeLookupError as e:
            self._advise(f"Error finding the cache datastore. Please remove the item manually: {e}", e)
            return False

        try:
            volume.delete(full_remote_path)
        except Exception as e:
            err = DeleteError(
                message=f"error removing {full_remote_path}: {e}",
                details={"datastore": volume_name, "full_remote_path": full_remote_path},
            )
            self._advise(f"Error removing item from the cache. Please remove the item manually: {e}", err)
            return False

        return True

    def _advise(self, message: str, exc: Exception) -> None:
        if self.ctx is None:
            return
        self.ctx.add_warning(step_id=self.step_id, message=message)
        self._log("warning", message, error_type=exc.__class__.__name__)
