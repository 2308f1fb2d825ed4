# tests/test_smoke.py
"""
Smoke test do Provision Flow: o pacote importa e expõe seu namespace público.
"""


def test_smoke():
    import provision_flow

    assert "run_build" in provision_flow.__all__
    assert "Engine" in provision_flow.__all__
