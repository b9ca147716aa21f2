from __future__ import annotations

import json
import math
from pathlib import Path

import pandas as pd

from td_importer.cli import main as cli_main

"""End-to-end runs of ``td-import import``."""


def test_import_into_existing_td(temp_workdir: Path, write_csv, simple_csv, clean_logging, capsys):
    td = temp_workdir / "td.json"
    td.write_text(
        json.dumps(
            {
                "@context": "https://www.w3.org/2022/wot/td/v1.1",
                "title": "Sensor",
                "properties": {"status": {"type": "string", "forms": []}},
            }
        ),
        encoding="utf-8",
    )
    out = temp_workdir / "out.json"
    path = write_csv("points.csv", simple_csv)

    code = cli_main(["import", str(path), "--td", str(td), "--output", str(out)])

    assert code == 0
    assert capsys.readouterr().out == ""
    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["title"] == "Sensor"
    assert list(data["properties"]) == ["status", "temperature", "humidity"]
    # 入力 TD は書き換えない
    assert list(json.loads(td.read_text(encoding="utf-8"))["properties"]) == ["status"]


def test_import_samples(samples_dir: Path, temp_workdir: Path, clean_logging, capsys):
    out = temp_workdir / "td.json"

    code = cli_main(
        ["import", str(samples_dir / "valid.csv"), str(samples_dir / "invalid.csv"), "-o", str(out)]
    )

    err = capsys.readouterr().err
    assert code == 0
    assert "SUMMARY files=2/2 success=2 failed=0 properties=7 warnings=3" in err
    props = json.loads(out.read_text(encoding="utf-8"))["properties"]
    # invalid.csv の temperature/humidity が valid.csv の同名を上書き (位置は維持)
    assert list(props) == ["temperature", "humidity", "alarm", "door", "pressure"]
    assert props["temperature"]["type"] == "float"
    assert props["door"]["forms"][0]["href"] == "/"
    assert props["pressure"]["forms"][0]["modbus:entity"] == "holdingregister"


def test_import_strict_entities(write_csv, clean_logging, capsys):
    path = write_csv("points.csv", "name,modbus:address,modbus:entity\ncoil1,1,coil\n")

    code = cli_main(["import", str(path), "--strict-entities"])

    err = capsys.readouterr().err
    assert code == 0
    assert 'WARN points.csv: Row 2, modbus:entity: Non-canonical modbus entity "coil", expected "Coil"' in err


def test_import_duplicate_error_policy_fails_file(temp_workdir: Path, write_csv, clean_logging, capsys):
    (temp_workdir / "config" / "import.yml").write_text("duplicate_name_policy: error\n", encoding="utf-8")
    path = write_csv("dup.csv", "name,modbus:address,modbus:entity\nt,1,Coil\nt,2,Coil\n")

    code = cli_main(["import", str(path)])

    assert code == 2
    assert 'duplicate property name "t"' in capsys.readouterr().err


def test_import_semicolon_delimiter_from_env_config(temp_workdir: Path, write_csv, clean_logging, capsys, monkeypatch):
    cfg = temp_workdir / "custom.yml"
    cfg.write_text("delimiter: ';'\nindent: 0\n", encoding="utf-8")
    (temp_workdir / ".env").write_text(f"TD_IMPORT_CONFIG={cfg}\n", encoding="utf-8")
    monkeypatch.setenv("TD_IMPORT_CONFIG", "config/not-used.yml")  # .env で上書きされる
    path = write_csv("points.csv", "name;modbus:address;modbus:entity\nt;1;Coil\n")

    code = cli_main(["import", str(path)])

    out = capsys.readouterr().out
    assert code == 0
    assert json.loads(out)["properties"]["t"]["forms"][0]["modbus:address"] == 1
    assert out.startswith('{\n"properties"')


def test_import_malformed_address_emits_nan(write_csv, clean_logging, capsys):
    path = write_csv("nan.csv", "name,modbus:address,modbus:entity\nt,forty,Coil\n")

    assert cli_main(["import", str(path)]) == 0

    data = json.loads(capsys.readouterr().out)
    assert math.isnan(data["properties"]["t"]["forms"][0]["modbus:address"])


def test_import_excel_workbook(temp_workdir: Path, clean_logging, capsys):
    path = temp_workdir / "data" / "points.xlsx"
    with pd.ExcelWriter(path) as writer:
        pd.DataFrame(
            [
                ["name", "type", "modbus:address", "modbus:entity", "modbus:zeroBasedAddressing"],
                ["temperature", "number", 40001, "HoldingRegister", "TRUE"],
            ]
        ).to_excel(writer, sheet_name="Points", header=False, index=False)

    code = cli_main(["import", str(path)])

    form = json.loads(capsys.readouterr().out)["properties"]["temperature"]["forms"][0]
    assert code == 0
    assert form["modbus:address"] == 40001
    assert form["modbus:zeroBasedAddressing"] is True


def test_import_debug_flag(write_csv, simple_csv, clean_logging, capsys):
    path = write_csv("points.csv", simple_csv)

    assert cli_main(["--debug", "import", str(path)]) == 0

    assert "DEBUG debug mode enabled" in capsys.readouterr().err
