"""
Fixtures compartilhados para testes do Provision Flow.

Fornecem:
- colaboradores remotos em memória (datastore, driver, VM) e uma Ui que grava mensagens
- um RunContext determinístico já ligado a esses colaboradores
- uma configuração de build mínima, semelhante ao uso real

Invariantes:
    - Nenhuma fixture fala com uma plataforma real
    - Nenhuma fixture executa pipeline
    - `run_id` é fixo para asserções determinísticas
"""

import pytest

from tests.fixtures.remote import FakeDriver, FakeVirtualMachine, FakeVolume, RecordingUi


@pytest.fixture
def ui():
    return RecordingUi()


@pytest.fixture
def volume():
    return FakeVolume(name="datastore1")


@pytest.fixture
def driver(volume):
    return FakeDriver({"datastore1": volume})


@pytest.fixture
def vm():
    return FakeVirtualMachine()


@pytest.fixture
def build_config_dict() -> dict:
    return {
        "datastore": "datastore1",
        "host": "esxi-01.example.com",
        "set_host_for_datastore_uploads": False,
        "remote_cache_cleanup": False,
        "cd_path": "/tmp/build/cidata.iso",
        "hardware": {
            "CPUs": 2,
            "RAM": 4096,
            "firmware": "efi",
        },
        "configuration_parameters": {"tools.guest.desktop.autolock": "TRUE"},
        "tools_sync_time": True,
    }


@pytest.fixture
def dummy_ctx(ui, driver, vm):
    """
    RunContext determinístico ligado aos fakes.

    Import lazy para que falhas de import do core apareçam no teste que as causa.
    """
    from provision_flow.core.pipeline.context import new_run_context

    return new_run_context(config={}, ui=ui, driver=driver, vm=vm, run_id="run-test-0001")
