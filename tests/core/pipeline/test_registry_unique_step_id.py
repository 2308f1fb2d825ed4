"""Testes do StepRegistry: ids únicos, não vazios e ordem preservada."""

import pytest

from provision_flow.core.exceptions import EngineConfigurationError
from provision_flow.core.pipeline.registry import DuplicateStepIdError, StepRegistry


class _Step:
    def __init__(self, step_id):
        self.id = step_id

    def run(self, ctx):
        raise NotImplementedError

    def cleanup(self, ctx):
        pass


def test_registry_preserves_order():
    reg = StepRegistry()
    for sid in ("remote.upload", "vm.hardware", "vm.config_params"):
        reg.add(_Step(sid))

    assert [s.id for s in reg.list()] == ["remote.upload", "vm.hardware", "vm.config_params"]
    assert reg.get("vm.hardware").id == "vm.hardware"


def test_registry_rejects_duplicate_ids():
    reg = StepRegistry()
    reg.add(_Step("vm.hardware"))

    with pytest.raises(DuplicateStepIdError):
        reg.add(_Step("vm.hardware"))


@pytest.mark.parametrize("bad_id", ["", "   ", None])
def test_registry_rejects_empty_ids(bad_id):
    with pytest.raises(EngineConfigurationError):
        StepRegistry().add(_Step(bad_id))


def test_registry_rejects_step_without_cleanup():
    class _NoCleanup:
        id = "no.cleanup"

        def run(self, ctx):
            pass

    with pytest.raises(EngineConfigurationError):
        StepRegistry().add(_NoCleanup())
