from __future__ import annotations

import importlib.util
from pathlib import Path
from types import ModuleType

import httpx
import pytest

DOCTOR_PATH = Path(__file__).resolve().parents[1] / "scripts" / "doctor.py"


@pytest.fixture()
def doctor() -> ModuleType:
    spec = importlib.util.spec_from_file_location("seeder_doctor", DOCTOR_PATH)
    assert spec is not None and spec.loader is not None
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_doctor_passes_without_store(
    doctor: ModuleType,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    monkeypatch.delenv("SEEDER_STORE_URL", raising=False)
    doctor.main()
    output = capsys.readouterr().out
    assert "httpx" in output
    assert "Seeder environment looks good." in output


def test_doctor_reports_unreachable_store(doctor: ModuleType, monkeypatch: pytest.MonkeyPatch) -> None:
    def refuse(url: str, timeout: float) -> httpx.Response:
        raise httpx.ConnectError("connection refused")

    monkeypatch.setenv("SEEDER_STORE_URL", "http://store.invalid")
    monkeypatch.setattr(httpx, "get", refuse)
    with pytest.raises(SystemExit, match="Store unreachable: http://store.invalid"):
        doctor.main()
