"""
Colaboradores remotos em memória: Provision Flow (testes)

Implementam por duck typing os contratos de `provision_flow.remote.driver`
e a `Ui`, registrando cada chamada para asserções.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Set, Tuple


class RecordingUi:
    def __init__(self) -> None:
        self.messages: List[str] = []
        self.errors: List[str] = []

    def say(self, message: str) -> None:
        self.messages.append(message)

    def error(self, message: str) -> None:
        self.errors.append(message)


class FakeVolume:
    def __init__(self, name: str = "datastore1", files: Optional[Set[str]] = None,
                 directories: Optional[Set[str]] = None):
        self.name = name
        self.files: Set[str] = set(files or ())
        self.directories: Set[str] = set(directories or ())
        self.uploads: List[Tuple[str, str, str, bool]] = []
        self.made_directories: List[str] = []
        self.deleted: List[str] = []
        self.fail_upload: Optional[Exception] = None
        self.fail_mkdir: Optional[Exception] = None
        self.fail_delete: Optional[Exception] = None
        self.fail_exists: Optional[Exception] = None
        self.fail_directory_exists: Optional[Exception] = None

    def exists(self, remote_path: str) -> bool:
        if self.fail_exists is not None:
            raise self.fail_exists
        return remote_path in self.files

    def directory_exists(self, remote_path: str) -> bool:
        if self.fail_directory_exists is not None:
            raise self.fail_directory_exists
        return remote_path in self.directories

    def make_directory(self, path: str) -> None:
        if self.fail_mkdir is not None:
            raise self.fail_mkdir
        self.made_directories.append(path)
        # "[ds] packer_cache" -> "packer_cache"
        self.directories.add(path.split("] ", 1)[-1])

    def upload(self, local_path: str, remote_path: str, host: str, set_host: bool) -> None:
        if self.fail_upload is not None:
            raise self.fail_upload
        self.uploads.append((local_path, remote_path, host, set_host))
        self.files.add(remote_path)

    def delete(self, remote_path: str) -> None:
        if self.fail_delete is not None:
            raise self.fail_delete
        self.deleted.append(remote_path)


class FakeDriver:
    def __init__(self, volumes: Optional[Dict[str, FakeVolume]] = None):
        self.volumes: Dict[str, FakeVolume] = dict(volumes or {})
        self.lookups: List[Tuple[str, str]] = []

    def find_volume(self, name: str, host: str) -> FakeVolume:
        self.lookups.append((name, host))
        if name not in self.volumes:
            raise LookupError(f"datastore '{name}' not found")
        return self.volumes[name]


class FakeVirtualMachine:
    def __init__(self) -> None:
        self.configure_calls: List[object] = []
        self.config_params_calls: List[Tuple[Dict[str, str], object]] = []
        self.fail_configure: Optional[Exception] = None
        self.fail_config_params: Optional[Exception] = None

    def configure(self, spec) -> None:
        if self.fail_configure is not None:
            raise self.fail_configure
        self.configure_calls.append(spec)

    def add_config_params(self, params, tools) -> None:
        if self.fail_config_params is not None:
            raise self.fail_config_params
        self.config_params_calls.append((params, tools))
