# src/provision_flow/remote/__init__.py
"""Colaboradores remotos: contratos do driver, endereçamento e cache de artefatos."""

from .addressing import CACHE_ROOT, RemoteArtifactRef, derive_remote_path
from .cache import RemoteArtifactCache, UploadOutcome
from .driver import (
    TOOLS_UPGRADE_AT_POWER_CYCLE,
    Driver,
    HardwareSpec,
    ToolsConfigInfo,
    VirtualMachine,
    Volume,
)

__all__ = [
    "CACHE_ROOT",
    "Driver",
    "HardwareSpec",
    "RemoteArtifactCache",
    "RemoteArtifactRef",
    "TOOLS_UPGRADE_AT_POWER_CYCLE",
    "ToolsConfigInfo",
    "UploadOutcome",
    "VirtualMachine",
    "Volume",
    "derive_remote_path",
]
