"""Steps mínimos para testes do Engine; registram a ordem de run/cleanup num journal."""

from provision_flow.core.errors import ProvisionErrorPayload
from provision_flow.core.pipeline.types import StepAction, StepResult


class JournalStep:
    def __init__(self, step_id, journal, *, halt=False, raises=None, cleanup_raises=None, on_run=None):
        self.id = step_id
        self.journal = journal
        self.halt = halt
        self.raises = raises
        self.cleanup_raises = cleanup_raises
        self.on_run = on_run

    def run(self, ctx):
        self.journal.append(("run", self.id))
        if self.on_run is not None:
            self.on_run(ctx)
        if self.raises is not None:
            raise self.raises
        if self.halt:
            err = ProvisionErrorPayload(type="UPLOAD_ERROR", message=f"{self.id} failed", details={})
            return StepResult(step_id=self.id, action=StepAction.HALT, summary=err.message, error=err)
        return StepResult(step_id=self.id, action=StepAction.CONTINUE, summary="ok")

    def cleanup(self, ctx):
        self.journal.append(("cleanup", self.id))
        if self.cleanup_raises is not None:
            raise self.cleanup_raises
