"""Step: vm.config_params

Adiciona configuration parameters (chave/valor livres) e, quando pedido,
ajustes do VMware Tools à VM, numa única chamada remota.

Config esperada (exemplo):
configuration_parameters:
  tools.guest.desktop.autolock: "TRUE"
tools_sync_time: true
tools_upgrade_policy: false
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from provision_flow.core.exceptions import ConfigParamsError
from provision_flow.core.pipeline.context import RunContext
from provision_flow.core.pipeline.types import StepAction, StepResult
from provision_flow.remote.driver import TOOLS_UPGRADE_AT_POWER_CYCLE, ToolsConfigInfo


@dataclass
class ConfigParamsConfig:
    configuration_parameters: Optional[Dict[str, str]] = None
    tools_sync_time: bool = False
    tools_upgrade_policy: bool = False

    def validate(self) -> List[str]:
        errs: List[str] = []
        params = self.configuration_parameters
        if params is None:
            return errs
        if not isinstance(params, dict):
            errs.append("'configuration_parameters' must be a mapping of strings")
            return errs
        for k, v in params.items():
            if not isinstance(k, str) or not isinstance(v, str):
                errs.append(f"'configuration_parameters' entry {k!r} must map a string to a string")
        return errs

    def params(self) -> Dict[str, str]:
        # Nunca None: ausência vira mapa vazio.
        return dict(self.configuration_parameters or {})

    def tools_config(self) -> Optional[ToolsConfigInfo]:
        """None quando nenhum ajuste foi pedido ("não especificado", não "desligado")."""
        if not (self.tools_sync_time or self.tools_upgrade_policy):
            return None
        return ToolsConfigInfo(
            sync_time_with_host=True if self.tools_sync_time else None,
            tools_upgrade_policy=TOOLS_UPGRADE_AT_POWER_CYCLE if self.tools_upgrade_policy else None,
        )


@dataclass
class ConfigParamsStep:
    config: ConfigParamsConfig = field(default_factory=ConfigParamsConfig)
    id: str = "vm.config_params"

    def run(self, ctx: RunContext) -> StepResult:
        vm = ctx.require("vm")
        params = self.config.params()
        tools = self.config.tools_config()

        ctx.say(step_id=self.id, message="Adding configuration parameters...")
        try:
            vm.add_config_params(params, tools)
        except Exception as e:
            err = ConfigParamsError(
                message=f"error adding configuration parameters: {e}",
                details={"parameters": sorted(params)},
            )
            ctx.log(
                step_id=self.id,
                level="error",
                message="vm.config_params failed",
                error_type=e.__class__.__name__,
                error_message=str(e) or "error",
            )
            return StepResult(step_id=self.id, action=StepAction.HALT, summary=err.message, error=err.to_payload())

        return StepResult(
            step_id=self.id,
            action=StepAction.CONTINUE,
            summary="configuration parameters added",
            payload={"parameters": len(params), "tools": tools is not None},
        )

    def cleanup(self, ctx: RunContext) -> None:
        pass
