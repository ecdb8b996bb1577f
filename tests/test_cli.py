import json
from pathlib import Path

from superast.cli import main

HELLO = Path(__file__).resolve().parent / "cases" / "hello_world" / "in.go"


def test_cli_prints_compact_json(capsys):
    assert main([str(HELLO)]) == 0
    out = capsys.readouterr().out
    assert out.endswith("}\n")
    assert out.count("\n") == 1
    assert json.loads(out)["statements"][0]["name"] == "main"


def test_cli_pretty_and_entry_return_type(capsys):
    assert main([str(HELLO), "-p", "--entry-return-type", "int"]) == 0
    out = capsys.readouterr().out
    assert out.startswith("{\n  \"id\": 0,")
    assert json.loads(out)["statements"][0]["return-type"]["name"] == "int"


def test_cli_reports_fatal_errors(tmp_path, capsys):
    src = tmp_path / "bad.go"
    src.write_text('package main\n\nimport "os"\n', encoding="utf-8")
    assert main([str(src)]) == 1
    assert capsys.readouterr().out == ""


def test_cli_missing_file(tmp_path):
    assert main([str(tmp_path / "nope.go")]) == 1


def test_cli_missing_config(tmp_path):
    assert main([str(HELLO), "-c", str(tmp_path / "none.yaml")]) == 1
