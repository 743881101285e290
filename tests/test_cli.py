import json

import pytest

from app import cli
from groupnorm.config import reset_settings

from conftest import STANDARD_HEADERS


@pytest.fixture(autouse=True)
def _fresh_settings():
    reset_settings()
    yield
    reset_settings()


def test_cli_preview_writes_report(make_workbook, tmp_path, capsys):
    workbook = make_workbook(
        {"Right Hindu Groups": [STANDARD_HEADERS, [1, "Hindu Jagruti Sena", 3543] + [""] * 8]}
    )
    output = tmp_path / "preview.json"

    code = cli.main(["preview", "--workbook", workbook, "--output", str(output), "--sample-size", "5"])

    assert code == 0
    data = json.loads(output.read_text(encoding="utf-8"))
    assert data["totalGroups"] == 1
    assert data["sampleGroups"][0]["id"] == "right_hindu_groups_1"
    out = capsys.readouterr().out
    assert "Total Groups to Import: 1" in out
    assert "NO DATABASE CHANGES WERE MADE" in out


def test_cli_preview_unreadable_workbook_writes_nothing(tmp_path, capsys):
    output = tmp_path / "preview.json"
    code = cli.main(["--workbook", str(tmp_path / "missing.xlsx"), "--output", str(output)])
    assert code == 1
    assert not output.exists()
    assert "[error]" in capsys.readouterr().out


def test_cli_preview_with_missing_rules_file(make_workbook, tmp_path):
    workbook = make_workbook({"Woman": [STANDARD_HEADERS]})
    code = cli.main(["--workbook", workbook, "--output", str(tmp_path / "p.json"), "--rules", str(tmp_path / "r.yaml")])
    assert code == 1


def test_cli_analyze(make_workbook, tmp_path, capsys):
    workbook = make_workbook({"Woman": [STANDARD_HEADERS], "Notes": [["Remark"], ["hello"]]})
    output = tmp_path / "columns.json"

    code = cli.main(["analyze", "--workbook", workbook, "--output", str(output)])

    assert code == 0
    data = json.loads(output.read_text(encoding="utf-8"))
    assert data["sheets"]["Woman"]["formatGroup"] == "standard"
    assert data["sheets"]["Notes"]["rowCount"] == 1
    assert "Woman: 0 rows, format=standard" in capsys.readouterr().out


def test_cli_rejects_negative_sample_size():
    assert cli.main(["--sample-size", "-3"]) == 2
