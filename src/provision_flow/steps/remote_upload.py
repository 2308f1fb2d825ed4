"""Step: remote.upload

Responsabilidades:
- enviar a ISO de boot informada pelo usuário (`ctx.iso_path`) para o cache
  do datastore e publicar `ctx.iso_remote_path`
- enviar o CD gerado pela build (`ctx.cd_path`) e reescrever `ctx.cd_path`
  com o caminho remoto
- publicar `ctx.remote_cache_cleanup` quando a limpeza do cache foi pedida

Cleanup:
- remove o CD do cache apenas quando ele foi enviado *nesta* run e a run
  foi cancelada, interrompida, ou a limpeza do cache foi pedida
- a ISO do usuário nunca é removida
- falhas de remoção viram warning; nunca viram erro da run
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

from provision_flow.core.errors import payload_from_exception
from provision_flow.core.exceptions import ProvisionException
from provision_flow.core.pipeline.context import RunContext
from provision_flow.core.pipeline.types import StepAction, StepResult
from provision_flow.remote.cache import RemoteArtifactCache

UPLOADED_CUSTOM_CD = "uploaded_custom_cd"


@dataclass
class RemoteUploadStep:
    """Envia ISO/CD para o cache remoto do datastore, sem reenvio."""

    datastore: str = ""
    host: str = ""
    set_host_for_datastore_uploads: bool = False
    remote_cache_cleanup: bool = False
    id: str = "remote.upload"

    def _cache(self, ctx: RunContext) -> RemoteArtifactCache:
        return RemoteArtifactCache(ctx.require("driver"), ctx=ctx, step_id=self.id)

    def run(self, ctx: RunContext) -> StepResult:
        cache = self._cache(ctx)
        payload: Dict[str, Any] = {}

        try:
            if ctx.iso_path:
                outcome = cache.ensure_uploaded(
                    ctx.iso_path, self.datastore, self.host, self.set_host_for_datastore_uploads
                )
                ctx.iso_remote_path = outcome.full_remote_path
                payload["iso_remote_path"] = outcome.full_remote_path
                payload["iso_uploaded"] = outcome.uploaded

            if ctx.cd_path:
                outcome = cache.ensure_uploaded(
                    ctx.cd_path, self.datastore, self.host, self.set_host_for_datastore_uploads
                )
                ctx.set_step_flag(self.id, UPLOADED_CUSTOM_CD, outcome.uploaded)
                ctx.cd_path = outcome.full_remote_path
                payload["cd_remote_path"] = outcome.full_remote_path
                payload["cd_uploaded"] = outcome.uploaded

        except ProvisionException as e:
            ctx.log(
                step_id=self.id,
                level="error",
                message="remote.upload failed",
                error_type=e.__class__.__name__,
                error_message=str(e),
            )
            return StepResult(
                step_id=self.id,
                action=StepAction.HALT,
                summary=str(e),
                error=payload_from_exception(e, step=self.id),
            )

        if self.remote_cache_cleanup:
            ctx.remote_cache_cleanup = True

        return StepResult(
            step_id=self.id,
            action=StepAction.CONTINUE,
            summary="artifacts available in remote cache" if payload else "nothing to upload",
            payload=payload,
        )

    def cleanup(self, ctx: RunContext) -> None:
        if not (ctx.cancelled or ctx.halted or ctx.remote_cache_cleanup):
            return

        if not ctx.get_step_flag(self.id, UPLOADED_CUSTOM_CD, False):
            return

        if not ctx.cd_path or ctx.driver is None:
            return

        # Limpa a flag antes de remover: um segundo cleanup nunca repete a remoção.
        ctx.set_step_flag(self.id, UPLOADED_CUSTOM_CD, False)
        self._cache(ctx).remove_uploaded(ctx.cd_path, self.datastore, self.host)
