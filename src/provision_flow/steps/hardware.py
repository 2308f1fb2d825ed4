"""Step: vm.hardware

Responsabilidades:
- descrever o hardware desejado da VM (`HardwareConfig`)
- validar consistência da configuração, coletando *todas* as violações
- aplicar a reconfiguração numa única chamada remota

Uma configuração toda em zero/default é o sentinela de "nada a mudar": o
Step termina em CONTINUE sem chamar o driver.

Config esperada (exemplo):
hardware:
  CPUs: 2
  cpu_cores: 1
  RAM: 4096
  RAM_reserve_all: true
  firmware: efi-secure
  vTPM: true
  precision_clock: ntp
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from typing import Any, Dict, List, Mapping, Tuple

from provision_flow.core.exceptions import ConfigureError
from provision_flow.core.pipeline.context import RunContext
from provision_flow.core.pipeline.types import StepAction, StepResult
from provision_flow.remote.driver import HardwareSpec

FIRMWARE_VALUES = ("", "bios", "efi", "efi-secure")
TPM_FIRMWARE_VALUES = ("efi", "efi-secure")
PRECISION_CLOCK_VALUES = ("", "none", "ntp", "ptp")

# nome da opção na build -> campo de HardwareConfig
OPTION_NAMES: Dict[str, str] = {
    "CPUs": "cpus",
    "cpu_cores": "cpu_cores",
    "CPU_reservation": "cpu_reservation",
    "CPU_limit": "cpu_limit",
    "CPU_hot_plug": "cpu_hot_plug",
    "RAM": "ram",
    "RAM_reservation": "ram_reservation",
    "RAM_reserve_all": "ram_reserve_all",
    "RAM_hot_plug": "ram_hot_plug",
    "video_ram": "video_ram",
    "displays": "displays",
    "vgpu_profile": "vgpu_profile",
    "NestedHV": "nested_hv",
    "firmware": "firmware",
    "force_bios_setup": "force_bios_setup",
    "vTPM": "vtpm",
    "precision_clock": "precision_clock",
}


@dataclass(frozen=True)
class HardwareConfig:
    cpus: int = 0
    cpu_cores: int = 0
    cpu_reservation: int = 0
    cpu_limit: int = 0
    cpu_hot_plug: bool = False
    ram: int = 0
    ram_reservation: int = 0
    ram_reserve_all: bool = False
    ram_hot_plug: bool = False
    video_ram: int = 0
    displays: int = 0
    vgpu_profile: str = ""
    nested_hv: bool = False
    firmware: str = ""
    force_bios_setup: bool = False
    vtpm: bool = False
    precision_clock: str = ""

    @classmethod
    def parse(cls, data: Mapping[str, Any]) -> Tuple["HardwareConfig", List[str]]:
        """Constrói a partir das opções da build; devolve também os problemas de parsing."""
        errs: List[str] = []
        types = {f.name: type(f.default) for f in fields(cls)}
        values: Dict[str, Any] = {}

        for option, value in data.items():
            name = OPTION_NAMES.get(option)
            if name is None:
                errs.append(f"unknown hardware option '{option}'")
                continue
            if value is None:
                continue
            expected = types[name]
            if expected is int and (isinstance(value, bool) or not isinstance(value, int)):
                errs.append(f"'{option}' must be an integer")
                continue
            if not isinstance(value, expected):
                errs.append(f"'{option}' must be a {expected.__name__}")
                continue
            values[name] = value

        return cls(**values), errs

    def validate(self) -> List[str]:
        errs: List[str] = []

        if self.ram_reservation > 0 and self.ram_reserve_all:
            errs.append("'RAM_reservation' and 'RAM_reserve_all' cannot be used together")

        if self.firmware not in FIRMWARE_VALUES:
            errs.append("'firmware' must be '', 'bios', 'efi' or 'efi-secure'")

        if self.vtpm and self.firmware not in TPM_FIRMWARE_VALUES:
            errs.append("'vTPM' could be enabled only when 'firmware' set to 'efi' or 'efi-secure'")

        if self.precision_clock not in PRECISION_CLOCK_VALUES:
            errs.append("'precision_clock' must be '', 'ptp', 'ntp', or 'none'")

        return errs

    def is_zero(self) -> bool:
        return self == HardwareConfig()

    def to_spec(self) -> HardwareSpec:
        values = asdict(self)
        return HardwareSpec(
            cpus=values["cpus"],
            cpu_cores=values["cpu_cores"],
            cpu_reservation=values["cpu_reservation"],
            cpu_limit=values["cpu_limit"],
            cpu_hot_add_enabled=values["cpu_hot_plug"],
            ram=values["ram"],
            ram_reservation=values["ram_reservation"],
            ram_reserve_all=values["ram_reserve_all"],
            memory_hot_add_enabled=values["ram_hot_plug"],
            video_ram=values["video_ram"],
            displays=values["displays"],
            vgpu_profile=values["vgpu_profile"],
            nested_hv=values["nested_hv"],
            firmware=values["firmware"],
            force_bios_setup=values["force_bios_setup"],
            vtpm_enabled=values["vtpm"],
            precision_clock=values["precision_clock"],
        )


@dataclass
class ConfigureHardwareStep:
    config: HardwareConfig = field(default_factory=HardwareConfig)
    id: str = "vm.hardware"

    def run(self, ctx: RunContext) -> StepResult:
        if self.config.is_zero():
            return StepResult(
                step_id=self.id,
                action=StepAction.CONTINUE,
                summary="no hardware changes requested",
                payload={"configured": False},
            )

        vm = ctx.require("vm")
        ctx.say(step_id=self.id, message="Customizing hardware...")
        try:
            vm.configure(self.config.to_spec())
        except Exception as e:
            err = ConfigureError(
                message=f"error customizing hardware: {e}",
                details={"hardware": asdict(self.config)},
            )
            ctx.log(
                step_id=self.id,
                level="error",
                message="vm.hardware failed",
                error_type=e.__class__.__name__,
                error_message=str(e) or "error",
            )
            return StepResult(step_id=self.id, action=StepAction.HALT, summary=err.message, error=err.to_payload())

        return StepResult(
            step_id=self.id,
            action=StepAction.CONTINUE,
            summary="hardware customized",
            payload={"configured": True},
        )

    def cleanup(self, ctx: RunContext) -> None:
        pass
