"""Testes do endereçamento canônico de artefatos no cache remoto."""

from provision_flow.remote.addressing import CACHE_ROOT, derive_remote_path


def test_derive_remote_path_canonical():
    ref = derive_remote_path("/tmp/x.iso", "datastore1")

    assert ref.base_name == "x.iso"
    assert ref.remote_path == "packer_cache/x.iso"
    assert ref.remote_directory == "[datastore1] packer_cache"
    assert ref.full_remote_path == "[datastore1] packer_cache/x.iso"


def test_derive_remote_path_is_deterministic():
    first = derive_remote_path("/tmp/x.iso", "datastore1")
    for _ in range(5):
        assert derive_remote_path("/tmp/x.iso", "datastore1") == first


def test_derive_remote_path_tuple_order():
    base_name, remote_path, remote_directory, full_remote_path = derive_remote_path(
        "/isos/ubuntu-22.04.iso", "nfs-01"
    )
    assert (base_name, remote_path, remote_directory, full_remote_path) == (
        "ubuntu-22.04.iso",
        "packer_cache/ubuntu-22.04.iso",
        "[nfs-01] packer_cache",
        "[nfs-01] packer_cache/ubuntu-22.04.iso",
    )


def test_derive_remote_path_windows_separators():
    ref = derive_remote_path("C:\\builds\\cidata.iso", "datastore1")
    assert ref.base_name == "cidata.iso"
    assert ref.full_remote_path == "[datastore1] packer_cache/cidata.iso"


def test_derive_remote_path_custom_cache_root():
    ref = derive_remote_path("/tmp/x.iso", "datastore1", cache_root="builds")
    assert CACHE_ROOT == "packer_cache"
    assert ref.remote_path == "builds/x.iso"
    assert ref.full_remote_path == "[datastore1] builds/x.iso"


def test_derive_remote_path_ignores_trailing_separators():
    assert derive_remote_path("/tmp/dir/", "datastore1").remote_path == "packer_cache/dir"
    assert derive_remote_path("C:\\builds\\cd\\", "datastore1").base_name == "cd"
    assert derive_remote_path("/", "datastore1").base_name == "/"
