"""Steps de provisionamento: upload para o cache remoto, hardware e configuration parameters."""

from .config_params import ConfigParamsConfig, ConfigParamsStep
from .hardware import ConfigureHardwareStep, HardwareConfig
from .remote_upload import RemoteUploadStep

__all__ = [
    "ConfigParamsConfig",
    "ConfigParamsStep",
    "ConfigureHardwareStep",
    "HardwareConfig",
    "RemoteUploadStep",
]
