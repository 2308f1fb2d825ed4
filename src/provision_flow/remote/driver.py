# src/provision_flow/remote/driver.py
"""
Contratos dos colaboradores remotos (plataforma de virtualização).

O Provision Flow não fala nenhum protocolo de rede: ele orquestra chamadas
sobre estas interfaces, implementadas por um cliente concreto (ex.: um
driver vSphere). Os métodos levantam a exceção que o cliente quiser; os
Steps e o cache remoto são responsáveis por encapsulá-las com contexto.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Protocol, runtime_checkable

TOOLS_UPGRADE_AT_POWER_CYCLE = "UpgradeAtPowerCycle"


@runtime_checkable
class Volume(Protocol):
    """Datastore remoto, endereçável por nome e host opcional."""

    name: str

    def exists(self, remote_path: str) -> bool:
        ...

    def directory_exists(self, remote_path: str) -> bool:
        ...

    def make_directory(self, path: str) -> None:
        ...

    def upload(self, local_path: str, remote_path: str, host: str, set_host: bool) -> None:
        ...

    def delete(self, remote_path: str) -> None:
        ...


@runtime_checkable
class Driver(Protocol):
    def find_volume(self, name: str, host: str) -> Volume:
        ...


@dataclass(frozen=True)
class HardwareSpec:
    """Reconfiguração de hardware entregue ao driver, campo a campo."""

    cpus: int = 0
    cpu_cores: int = 0
    cpu_reservation: int = 0
    cpu_limit: int = 0
    cpu_hot_add_enabled: bool = False
    ram: int = 0
    ram_reservation: int = 0
    ram_reserve_all: bool = False
    memory_hot_add_enabled: bool = False
    video_ram: int = 0
    displays: int = 0
    vgpu_profile: str = ""
    nested_hv: bool = False
    firmware: str = ""
    force_bios_setup: bool = False
    vtpm_enabled: bool = False
    precision_clock: str = ""


@dataclass(frozen=True)
class ToolsConfigInfo:
    """Ajustes do VMware Tools. `None` significa "não especificado"."""

    sync_time_with_host: Optional[bool] = None
    tools_upgrade_policy: Optional[str] = None


@runtime_checkable
class VirtualMachine(Protocol):
    def configure(self, spec: HardwareSpec) -> None:
        ...

    def add_config_params(self, params: Dict[str, str], tools: Optional[ToolsConfigInfo]) -> None:
        ...
