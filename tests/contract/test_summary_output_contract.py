from __future__ import annotations

import json
import re

from td_importer.cli import main as cli_main

SUMMARY_RE = re.compile(
    r"^SUMMARY files=(\d+)/(\d+) success=(\d+) failed=(\d+) properties=(\d+) warnings=(\d+) "
    r"elapsed_sec=\d+(\.\d+)?$"
)


def test_summary_line_is_last_stderr_line(write_csv, clean_logging, capsys):
    path = write_csv(
        "warn.csv",
        "name,type,modbus:address,modbus:entity\n"
        "temperature,float,40001,HoldingRegister\n"
        "humidity,number,40003,Register\n",
    )

    assert cli_main(["import", str(path)]) == 0

    lines = capsys.readouterr().err.strip().splitlines()
    m = SUMMARY_RE.match(lines[-1])
    assert m, lines[-1]
    assert m.groups()[:6] == ("1", "1", "1", "0", "2", "2")


def test_stdout_carries_only_json(write_csv, simple_csv, clean_logging, capsys):
    path = write_csv("points.csv", simple_csv)

    cli_main(["import", str(path)])

    out = capsys.readouterr().out
    data = json.loads(out)
    assert set(data) == {"properties"}
    assert out.startswith('{\n  "properties"')


def test_warnings_are_labeled(write_csv, clean_logging, capsys):
    path = write_csv("warn.csv", "name,type,modbus:address,modbus:entity\nt,float,1,Coil\n")

    cli_main(["import", str(path)])

    assert 'WARN warn.csv: Row 2, type: Invalid type "float"' in capsys.readouterr().err
