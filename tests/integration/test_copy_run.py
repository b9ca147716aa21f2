from __future__ import annotations

import json
from pathlib import Path

from td_importer.cli import main as cli_main

"""End-to-end runs of ``td-import copy``."""

TD = {
    "title": "Lamp",
    "actions": {
        "start": {"title": "Start", "forms": []},
        "toggle": {"title": "Toggle", "forms": [{"href": "/toggle"}]},
        "stop": {"title": "Stop", "forms": []},
    },
}


def _write_td(temp_workdir: Path) -> Path:
    path = temp_workdir / "td.json"
    path.write_text(json.dumps(TD), encoding="utf-8")
    return path


def test_copy_to_stdout(temp_workdir: Path, clean_logging, capsys):
    td = _write_td(temp_workdir)

    code = cli_main(["copy", str(td), "actions", "toggle"])

    captured = capsys.readouterr()
    data = json.loads(captured.out)
    assert code == 0
    assert list(data["actions"]) == ["start", "toggle", "toggle_copy", "stop"]
    assert data["actions"]["toggle_copy"]["title"] == "Toggle copy"
    assert 'INFO copied "toggle" to "toggle_copy" in actions' in captured.err


def test_copy_twice_via_output_file(temp_workdir: Path, clean_logging):
    td = _write_td(temp_workdir)

    assert cli_main(["copy", str(td), "actions", "toggle", "--output", str(td)]) == 0
    assert cli_main(["copy", str(td), "actions", "toggle", "--output", str(td)]) == 0

    data = json.loads(td.read_text(encoding="utf-8"))
    assert list(data["actions"]) == ["start", "toggle", "toggle_copy_1", "toggle_copy", "stop"]
