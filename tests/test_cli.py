"""
tests/test_cli.py
Tests for the argparse command line in cs2ts.cli.
"""

from __future__ import annotations

import pathlib
from typing import List

import pytest

from cs2ts.cli import (
    EXIT_INPUT_ERROR,
    EXIT_PARSE_ERROR,
    EXIT_SUCCESS,
    EXIT_WARNINGS,
    cli_main,
)


def _run(argv: List[str]) -> int:
    with pytest.raises(SystemExit) as excinfo:
        cli_main(argv)
    return excinfo.value.code


def test_translate_to_stdout(source_file: pathlib.Path, capsys) -> None:
    assert _run(["-s", str(source_file), "-q"]) == EXIT_SUCCESS
    out = capsys.readouterr().out
    assert out.startswith("import { Entity } from './Entity';\n")
    assert "export enum Color {\n" in out


def test_translate_to_file(source_file: pathlib.Path, tmp_path: pathlib.Path) -> None:
    target = tmp_path / "out" / "models.ts"
    assert _run(["-s", str(source_file), "-o", str(target), "--enums", "Color:keyof"]) == EXIT_SUCCESS
    text = target.read_text(encoding="utf-8")
    assert "export type Color = Uncapitalize<keyof typeof ColorEnum>;" in text


def test_multiple_sources_form_one_unit(tmp_path: pathlib.Path, capsys) -> None:
    first = tmp_path / "Order.cs"
    second = tmp_path / "Customer.cs"
    first.write_text("public class Order { public Customer Buyer { get; set; } }", encoding="utf-8")
    second.write_text("public class Customer { public string Name { get; set; } }", encoding="utf-8")
    assert _run(["-s", str(first), "-s", str(second)]) == EXIT_SUCCESS
    out = capsys.readouterr().out
    assert "import" not in out
    assert "export type Order = {" in out and "export type Customer = {" in out


def test_config_file_with_cli_override(
    source_file: pathlib.Path, config_yaml_path: pathlib.Path, capsys
) -> None:
    argv = ["-s", str(source_file), "--config", str(config_yaml_path), "--type-map", "Entity=./base"]
    assert _run(argv) == EXIT_SUCCESS
    out = capsys.readouterr().out
    assert out.startswith("import { Entity } from './base';\n")
    assert "export enum ColorEnum {" in out


def test_fail_on_warnings(tmp_path: pathlib.Path) -> None:
    path = tmp_path / "Pair.cs"
    path.write_text("public class Pair { public (int, int) Value { get; set; } }", encoding="utf-8")
    assert _run(["-s", str(path)]) == EXIT_SUCCESS
    assert _run(["-s", str(path), "--fail-on-warnings"]) == EXIT_WARNINGS


def test_parse_error(tmp_path: pathlib.Path) -> None:
    path = tmp_path / "Broken.cs"
    path.write_text("public class {", encoding="utf-8")
    assert _run(["-s", str(path)]) == EXIT_PARSE_ERROR


def test_missing_source_file(tmp_path: pathlib.Path) -> None:
    assert _run(["-s", str(tmp_path / "nope.cs")]) == EXIT_INPUT_ERROR


def test_no_sources() -> None:
    assert _run([]) == EXIT_INPUT_ERROR


def test_bad_type_map(source_file: pathlib.Path) -> None:
    assert _run(["-s", str(source_file), "--type-map", "Money"]) == EXIT_INPUT_ERROR


def test_serve_runs_uvicorn(monkeypatch) -> None:
    calls = {}

    def fake_run(app, host, port):
        calls.update(app=app, host=host, port=port)

    monkeypatch.setattr("uvicorn.run", fake_run)
    assert _run(["--serve", "--port", "9001"]) == EXIT_SUCCESS
    assert calls["host"] == "127.0.0.1"
    assert calls["port"] == 9001
