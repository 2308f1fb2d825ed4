"""
Testes do protocolo de Step.

Steps não herdam de classe base: a conformidade é estrutural
(`typing.Protocol` + `@runtime_checkable`), exigindo `id`, `run` e `cleanup`.
"""

import pytest

from provision_flow.core.pipeline.step import Step
from provision_flow.core.pipeline.types import StepAction, StepResult
from provision_flow.core.errors import ProvisionErrorPayload
from provision_flow.steps import ConfigParamsStep, ConfigureHardwareStep, RemoteUploadStep


class _DuckStep:
    id = "duck"

    def run(self, ctx):
        return StepResult(step_id=self.id, action=StepAction.CONTINUE, summary="ok")

    def cleanup(self, ctx):
        pass


class _RunOnly:
    id = "run.only"

    def run(self, ctx):
        return None


def test_duck_typed_step_satisfies_protocol(dummy_ctx):
    step = _DuckStep()
    assert isinstance(step, Step)
    assert step.run(dummy_ctx).action == StepAction.CONTINUE


def test_step_without_cleanup_does_not_satisfy_protocol():
    assert not isinstance(_RunOnly(), Step)


@pytest.mark.parametrize("step", [RemoteUploadStep(), ConfigureHardwareStep(), ConfigParamsStep()])
def test_concrete_steps_satisfy_protocol(step):
    assert isinstance(step, Step)


def test_halt_result_requires_error():
    with pytest.raises(ValueError):
        StepResult(step_id="x", action=StepAction.HALT, summary="no error")


def test_halt_result_with_error():
    err = ProvisionErrorPayload(type="UPLOAD_ERROR", message="boom", details={})
    result = StepResult(step_id="x", action=StepAction.HALT, summary="boom", error=err)
    assert result.halted is True
