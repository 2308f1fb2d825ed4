# src/provision_flow/build.py
"""
Configuração de build → configs tipadas dos Steps → pipeline ordenado.

Este módulo liga a configuração declarativa (mapa vindo de YAML/JSON) aos
Steps concretos:

    datastore: datastore1
    host: esxi-01.example.com
    set_host_for_datastore_uploads: false
    remote_cache_cleanup: true
    iso_path: /isos/ubuntu.iso
    cd_path: /tmp/build/cidata.iso
    hardware:
      CPUs: 2
      RAM: 4096
      firmware: efi
    configuration_parameters:
      tools.guest.desktop.autolock: "TRUE"
    tools_sync_time: true
    tools_upgrade_policy: false

Princípios:
    - A validação é total: `prepare` devolve todas as violações de uma vez
    - A configuração é validada uma vez e aplicada no máximo uma vez por run
    - Opções de hardware/tools são repassadas ao driver sem reinterpretação
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from provision_flow.core.config.loader import load_config
from provision_flow.core.engine.engine import Engine, RunResult
from provision_flow.core.exceptions import ValidationError
from provision_flow.core.pipeline.context import new_run_context
from provision_flow.core.pipeline.step import Step
from provision_flow.remote.driver import Driver, VirtualMachine
from provision_flow.steps.config_params import ConfigParamsConfig, ConfigParamsStep
from provision_flow.steps.hardware import ConfigureHardwareStep, HardwareConfig
from provision_flow.steps.remote_upload import RemoteUploadStep
from provision_flow.ui import Ui

_STR_OPTIONS = ("datastore", "host", "iso_path", "cd_path")
_BOOL_OPTIONS = (
    "set_host_for_datastore_uploads",
    "remote_cache_cleanup",
    "tools_sync_time",
    "tools_upgrade_policy",
)


@dataclass
class BuildConfig:
    datastore: str = ""
    host: str = ""
    set_host_for_datastore_uploads: bool = False
    remote_cache_cleanup: bool = False
    iso_path: Optional[str] = None
    cd_path: Optional[str] = None
    hardware: HardwareConfig = field(default_factory=HardwareConfig)
    config_params: ConfigParamsConfig = field(default_factory=ConfigParamsConfig)

    parse_errors: List[str] = field(default_factory=list, repr=False)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "BuildConfig":
        errs: List[str] = []

        for key in _STR_OPTIONS:
            value = data.get(key)
            if value is not None and not isinstance(value, str):
                errs.append(f"'{key}' must be a string")
        for key in _BOOL_OPTIONS:
            value = data.get(key)
            if value is not None and not isinstance(value, bool):
                errs.append(f"'{key}' must be a bool")

        hw_data = data.get("hardware") or {}
        if isinstance(hw_data, Mapping):
            hardware, hw_errs = HardwareConfig.parse(hw_data)
            errs.extend(hw_errs)
        else:
            hardware = HardwareConfig()
            errs.append("'hardware' must be a mapping")

        def _str(key: str, default: Any) -> Any:
            value = data.get(key)
            return value if isinstance(value, str) else default

        def _bool(key: str) -> bool:
            return data.get(key) is True

        return cls(
            datastore=_str("datastore", ""),
            host=_str("host", ""),
            set_host_for_datastore_uploads=_bool("set_host_for_datastore_uploads"),
            remote_cache_cleanup=_bool("remote_cache_cleanup"),
            iso_path=_str("iso_path", None) or None,
            cd_path=_str("cd_path", None) or None,
            hardware=hardware,
            config_params=ConfigParamsConfig(
                configuration_parameters=data.get("configuration_parameters"),
                tools_sync_time=_bool("tools_sync_time"),
                tools_upgrade_policy=_bool("tools_upgrade_policy"),
            ),
            parse_errors=errs,
        )

    def prepare(self) -> List[str]:
        """Todas as violações da build (parsing + hardware + configuration parameters)."""
        errs = list(self.parse_errors)
        errs.extend(self.hardware.validate())
        errs.extend(self.config_params.validate())
        if (self.iso_path or self.cd_path) and not self.datastore:
            errs.append("'datastore' is required when 'iso_path' or 'cd_path' is set")
        if self.set_host_for_datastore_uploads and not self.host:
            errs.append("'host' is required when 'set_host_for_datastore_uploads' is enabled")
        return errs

    def validated(self) -> "BuildConfig":
        errs = self.prepare()
        if errs:
            raise ValidationError(
                message=f"invalid build configuration ({len(errs)} error(s)): " + "; ".join(errs),
                details={"violations": errs},
                hint="Corrija todas as opções listadas antes de reexecutar a build.",
            )
        return self


def load_build_config(*, defaults_path: str, local_path: Optional[str] = None) -> Dict[str, Any]:
    """Carrega a build (YAML/JSON + override local) e falha com `ValidationError` se inconsistente."""
    raw = load_config(defaults_path=defaults_path, local_path=local_path)
    BuildConfig.from_dict(raw).validated()
    return raw


def build_steps(config: BuildConfig) -> List[Step]:
    return [
        RemoteUploadStep(
            datastore=config.datastore,
            host=config.host,
            set_host_for_datastore_uploads=config.set_host_for_datastore_uploads,
            remote_cache_cleanup=config.remote_cache_cleanup,
        ),
        ConfigureHardwareStep(config=config.hardware),
        ConfigParamsStep(config=config.config_params),
    ]


def run_build(
    raw_config: Mapping[str, Any],
    *,
    ui: Ui,
    driver: Driver,
    vm: VirtualMachine,
    run_id: Optional[str] = None,
) -> RunResult:
    """Valida a build, monta o pipeline e executa uma run completa."""
    config = BuildConfig.from_dict(raw_config).validated()
    ctx = new_run_context(config=dict(raw_config), ui=ui, driver=driver, vm=vm, run_id=run_id)
    return Engine(steps=build_steps(config), ctx=ctx).run()
