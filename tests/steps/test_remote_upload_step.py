"""
Testes unitários para o Step remote.upload.

Cobre:
- no-op quando não há ISO nem CD
- publicação de iso_remote_path e reescrita de cd_path
- HALT com erro tipado quando o datastore não existe
- cleanup condicionado a: CD enviado nesta run + (cancelado | halt | limpeza pedida)
- isolamento de falhas de remoção
"""

from provision_flow.core.errors import VOLUME_LOOKUP_ERROR
from provision_flow.core.pipeline.types import StepAction
from provision_flow.steps.remote_upload import UPLOADED_CUSTOM_CD, RemoteUploadStep


def _step(**kwargs):
    kwargs.setdefault("datastore", "datastore1")
    return RemoteUploadStep(**kwargs)


def test_nothing_to_upload(dummy_ctx, volume):
    result = _step().run(dummy_ctx)

    assert result.action == StepAction.CONTINUE
    assert volume.uploads == []
    assert dummy_ctx.iso_remote_path is None


def test_iso_and_cd_are_uploaded(dummy_ctx, volume):
    dummy_ctx.iso_path = "/isos/ubuntu.iso"
    dummy_ctx.cd_path = "/tmp/build/cidata.iso"

    result = _step().run(dummy_ctx)

    assert result.action == StepAction.CONTINUE
    assert dummy_ctx.iso_remote_path == "[datastore1] packer_cache/ubuntu.iso"
    assert dummy_ctx.cd_path == "[datastore1] packer_cache/cidata.iso"
    assert dummy_ctx.get_step_flag("remote.upload", UPLOADED_CUSTOM_CD) is True
    assert len(volume.uploads) == 2


def test_preexisting_cd_is_not_flagged_as_uploaded(dummy_ctx, volume):
    volume.files.add("packer_cache/cidata.iso")
    dummy_ctx.cd_path = "/tmp/build/cidata.iso"

    _step().run(dummy_ctx)

    assert volume.uploads == []
    assert dummy_ctx.get_step_flag("remote.upload", UPLOADED_CUSTOM_CD) is False


def test_unknown_datastore_halts(dummy_ctx):
    dummy_ctx.iso_path = "/isos/ubuntu.iso"

    result = _step(datastore="nope").run(dummy_ctx)

    assert result.action == StepAction.HALT
    assert result.error.type == VOLUME_LOOKUP_ERROR
    assert result.error.message.startswith("error finding the datastore")
    assert result.error.details["step"] == "remote.upload"


def test_existence_check_failure_halts_with_datastore_context(dummy_ctx, volume):
    dummy_ctx.cd_path = "/tmp/build/cidata.iso"
    volume.fail_exists = OSError("connection reset")

    result = _step().run(dummy_ctx)

    assert result.action == StepAction.HALT
    assert result.error.type == VOLUME_LOOKUP_ERROR
    assert result.error.message == (
        "error checking [datastore1] packer_cache/cidata.iso in the datastore: connection reset"
    )
    assert result.error.details == {
        "datastore": "datastore1",
        "remote_path": "packer_cache/cidata.iso",
        "step": "remote.upload",
    }
    assert dummy_ctx.get_step_flag("remote.upload", UPLOADED_CUSTOM_CD) is None
    assert dummy_ctx.cd_path == "/tmp/build/cidata.iso"


def test_remote_cache_cleanup_is_published(dummy_ctx):
    _step(remote_cache_cleanup=True).run(dummy_ctx)
    assert dummy_ctx.remote_cache_cleanup is True


def test_cleanup_after_success_keeps_uploaded_cd(dummy_ctx, volume):
    dummy_ctx.cd_path = "/tmp/build/cidata.iso"
    step = _step()
    step.run(dummy_ctx)

    step.cleanup(dummy_ctx)

    assert volume.deleted == []


def test_cleanup_after_halt_deletes_uploaded_cd_once(dummy_ctx, volume):
    dummy_ctx.cd_path = "/tmp/build/cidata.iso"
    step = _step()
    step.run(dummy_ctx)
    dummy_ctx.halted = True

    step.cleanup(dummy_ctx)
    step.cleanup(dummy_ctx)

    assert volume.deleted == ["[datastore1] packer_cache/cidata.iso"]


def test_cleanup_after_cancel_deletes_uploaded_cd(dummy_ctx, volume):
    dummy_ctx.cd_path = "/tmp/build/cidata.iso"
    step = _step()
    step.run(dummy_ctx)
    dummy_ctx.cancel()

    step.cleanup(dummy_ctx)

    assert volume.deleted == ["[datastore1] packer_cache/cidata.iso"]


def test_cleanup_requested_deletes_after_success(dummy_ctx, volume):
    dummy_ctx.cd_path = "/tmp/build/cidata.iso"
    step = _step(remote_cache_cleanup=True)
    step.run(dummy_ctx)

    step.cleanup(dummy_ctx)

    assert volume.deleted == ["[datastore1] packer_cache/cidata.iso"]


def test_cleanup_never_deletes_preexisting_cd(dummy_ctx, volume):
    volume.files.add("packer_cache/cidata.iso")
    dummy_ctx.cd_path = "/tmp/build/cidata.iso"
    step = _step(remote_cache_cleanup=True)
    step.run(dummy_ctx)
    dummy_ctx.halted = True

    step.cleanup(dummy_ctx)

    assert volume.deleted == []


def test_cleanup_never_deletes_user_iso(dummy_ctx, volume):
    dummy_ctx.iso_path = "/isos/ubuntu.iso"
    step = _step()
    step.run(dummy_ctx)
    dummy_ctx.halted = True

    step.cleanup(dummy_ctx)

    assert volume.deleted == []


def test_cleanup_without_run_is_noop(dummy_ctx, volume):
    dummy_ctx.halted = True
    _step().cleanup(dummy_ctx)
    assert volume.deleted == []


def test_cleanup_delete_failure_keeps_original_error(dummy_ctx, volume):
    from provision_flow.core.errors import ProvisionErrorPayload

    dummy_ctx.cd_path = "/tmp/build/cidata.iso"
    step = _step()
    step.run(dummy_ctx)

    original = ProvisionErrorPayload(type="CONFIGURE_ERROR", message="boom", details={})
    dummy_ctx.halted = True
    dummy_ctx.record_error(original)
    volume.fail_delete = RuntimeError("file locked")

    step.cleanup(dummy_ctx)

    assert dummy_ctx.error is original
    assert any("remove the item manually" in w for w in dummy_ctx.warnings["remote.upload"])
