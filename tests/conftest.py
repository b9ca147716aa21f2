# Shared pytest fixtures
from __future__ import annotations

import tempfile
from pathlib import Path

import pytest

from td_importer.logging.init import reset_logging

SAMPLES_DIR = Path(__file__).resolve().parents[1] / "samples" / "csv"

FULL_HEADER = (
    "name,title,description,type,minimum,maximum,unit,href,modbus:unitID,modbus:address,"
    "modbus:quantity,modbus:type,modbus:zeroBasedAddressing,modbus:entity,modbus:pollingTime,"
    "modbus:function,modbus:mostSignificantByte,modbus:mostSignificantWord,modbus:timeout"
)


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        monkeypatch.chdir(p)
        monkeypatch.delenv("TD_IMPORT_CONFIG", raising=False)
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """delimiter: ","
entity_casing_policy: recognize
duplicate_name_policy: overwrite
logs_directory: ./logs
write_issue_log: true
indent: 2
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "import.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def simple_csv() -> str:
    return (
        "name,type,modbus:address,modbus:entity,href\n"
        "temperature,number,40001,HoldingRegister,/temperature\n"
        "humidity,number,40003,InputRegister,/humidity\n"
    )


@pytest.fixture()
def write_csv(temp_workdir: Path):
    def _write(name: str, text: str) -> Path:
        path = temp_workdir / "data" / name
        path.write_text(text, encoding="utf-8")
        return path
    return _write


@pytest.fixture()
def clean_logging():
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def samples_dir() -> Path:
    return SAMPLES_DIR


@pytest.fixture()
def full_header() -> str:
    return FULL_HEADER
