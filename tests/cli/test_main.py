# Copyright 2026 singerschema Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the singerschema CLI entry point."""

import io
import json
import sys
from pathlib import Path

import pytest

from singerschema.cli.main import main

# ###############
# Helpers
# ###############

_CATALOG = {
    "streams": [
        {
            "stream": "users",
            "tap_stream_id": "users",
            "schema": {
                "type": "object",
                "properties": {"id": {"type": "integer"}, "updated_at": {"type": "string", "format": "date-time"}},
            },
            "metadata": [{"metadata": {"selected": True}, "breadcrumb": []}],
        }
    ]
}


def _run(monkeypatch: pytest.MonkeyPatch, *argv: str) -> int:
    """Run main() with *argv* and return its exit code."""
    monkeypatch.setattr(sys, "argv", ["singerschema", *argv])
    with pytest.raises(SystemExit) as exc_info:
        main()
    return exc_info.value.code


@pytest.fixture(autouse=True)
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a stray .singerschema.yaml in the working directory from leaking in."""
    monkeypatch.chdir(tmp_path)


def test_main_no_args_prints_help_and_exits(monkeypatch: pytest.MonkeyPatch) -> None:
    """main() with no subcommand prints help and exits with code 0."""
    assert _run(monkeypatch) == 0


# -------- check-schema tests --------


def test_check_schema_ok(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    path = tmp_path / "schema.json"
    path.write_text('{"type": ["integer", "null"]}', encoding="utf-8")
    assert _run(monkeypatch, "check-schema", str(path)) == 0
    assert "schema OK" in capsys.readouterr().out


def test_check_schema_normalize(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    """--normalize re-encodes, e.g. a bare formatted string becomes a one-element list."""
    path = tmp_path / "schema.json"
    path.write_text('{"format": "date", "type": "string", "minLength": 3}', encoding="utf-8")
    assert _run(monkeypatch, "check-schema", "--normalize", str(path)) == 0
    assert json.loads(capsys.readouterr().out) == {"type": ["string"], "format": "date"}


def test_check_schema_reports_decode_error(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    path = tmp_path / "schema.json"
    path.write_text('{"type": "array", "items": 1}', encoding="utf-8")
    assert _run(monkeypatch, "check-schema", str(path)) == 1
    assert "$.items" in capsys.readouterr().err


def test_check_schema_missing_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    assert _run(monkeypatch, "check-schema", str(tmp_path / "missing.json")) == 1


def test_check_schema_invalid_utf8(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    path = tmp_path / "schema.json"
    path.write_bytes(b'{"type": "\xff"}')
    assert _run(monkeypatch, "check-schema", str(path)) == 1
    assert "Error:" in capsys.readouterr().err


# -------- check-catalog tests --------


def test_check_catalog_clean(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps(_CATALOG), encoding="utf-8")
    assert _run(monkeypatch, "check-catalog", str(path)) == 0
    out = capsys.readouterr().out
    assert "1 stream(s), no issues found." in out


def test_check_catalog_warnings_do_not_fail(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    catalog = {"streams": [_CATALOG["streams"][0], _CATALOG["streams"][0]]}
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps(catalog), encoding="utf-8")
    assert _run(monkeypatch, "check-catalog", str(path)) == 0
    out = capsys.readouterr().out
    assert "Warning: tap_stream_id 'users' is used by 2 streams" in out


def test_check_catalog_normalize_uses_config(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    (tmp_path / ".singerschema.yaml").write_text("output:\n  indent: 2\n  sort-keys: true\n", encoding="utf-8")
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps(_CATALOG), encoding="utf-8")
    assert _run(monkeypatch, "check-catalog", "--normalize", str(path)) == 0
    out = capsys.readouterr().out
    assert out.startswith('{\n  "streams": [')
    normalized = json.loads(out)
    assert normalized["streams"][0]["schema"]["properties"]["updated_at"] == {
        "type": ["string"],
        "format": "date-time",
    }


def test_check_catalog_explicit_config(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    config = tmp_path / "custom.yaml"
    config.write_text("output:\n  indent: 4\n", encoding="utf-8")
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps(_CATALOG), encoding="utf-8")
    assert _run(monkeypatch, "--config", str(config), "check-catalog", "--normalize", str(path)) == 0
    assert capsys.readouterr().out.startswith('{\n    "streams"')


def test_check_catalog_bad_config(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps(_CATALOG), encoding="utf-8")
    assert _run(monkeypatch, "--config", str(tmp_path / "absent.yaml"), "check-catalog", str(path)) == 1
    assert "Config file not found" in capsys.readouterr().err


def test_check_catalog_invalid_json(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    path = tmp_path / "catalog.json"
    path.write_text("{", encoding="utf-8")
    assert _run(monkeypatch, "check-catalog", str(path)) == 1
    assert "invalid JSON" in capsys.readouterr().err


def test_check_catalog_invalid_utf8(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    path = tmp_path / "catalog.json"
    path.write_bytes(b'{"streams": [], "note": "\xff"}')
    assert _run(monkeypatch, "check-catalog", str(path)) == 1
    err = capsys.readouterr().err
    assert err.startswith("Error:")
    assert "invalid JSON" in err


# -------- check-messages tests --------

_MESSAGE_LINES = [
    '{"type": "SCHEMA", "stream": "users", "schema": {"type": "object", "properties": {"id": {"type": "integer"}}},'
    ' "key_properties": ["id"]}',
    '{"type": "RECORD", "stream": "users", "record": {"id": 1, "name": "Chris"}}',
    '{"type": "RECORD", "stream": "users", "record": {"id": 2, "name": "Sam"}}',
    '{"type": "ACTIVATE_VERSION", "stream": "users", "version": 1695106400957}',
    '{"type": "STATE", "value": {"bookmarks": {}}}',
]


def test_check_messages_ok(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    path = tmp_path / "messages.jsonl"
    path.write_text("\n".join(_MESSAGE_LINES) + "\n", encoding="utf-8")
    assert _run(monkeypatch, "check-messages", str(path)) == 0
    out = capsys.readouterr().out
    assert "RECORD: 2" in out
    assert "SCHEMA: 1" in out
    assert "5 message(s) decoded." in out


def test_check_messages_reports_each_bad_line(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    lines = [_MESSAGE_LINES[1], '{"type": "BOGUS"}', _MESSAGE_LINES[2], "oops"]
    path = tmp_path / "messages.jsonl"
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    assert _run(monkeypatch, "check-messages", str(path)) == 1
    captured = capsys.readouterr()
    assert "Line 2" in captured.err
    assert "unknown message type 'BOGUS'" in captured.err
    assert "Line 4" in captured.err
    assert "2 line(s) failed to decode." in captured.out


def test_check_messages_warns_on_unknown_key_property(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    line = '{"type": "SCHEMA", "stream": "users", "schema": {}, "key_properties": ["id"]}'
    path = tmp_path / "messages.jsonl"
    path.write_text(line + "\n", encoding="utf-8")
    assert _run(monkeypatch, "check-messages", str(path)) == 0
    assert "Warning: SCHEMA message for stream 'users'" in capsys.readouterr().out


def test_check_messages_from_stdin(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.setattr(sys, "stdin", io.StringIO("\n".join(_MESSAGE_LINES[1:3]) + "\n"))
    assert _run(monkeypatch, "check-messages", "-") == 0
    assert "<stdin>: 2 message(s) decoded." in capsys.readouterr().out


def test_check_messages_missing_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    assert _run(monkeypatch, "check-messages", str(tmp_path / "missing.jsonl")) == 1


def test_check_messages_invalid_utf8_file(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    path = tmp_path / "messages.jsonl"
    path.write_bytes(b'{"type": "STATE", "value": "\xff"}\n')
    assert _run(monkeypatch, "check-messages", str(path)) == 1
    assert "is not valid UTF-8" in capsys.readouterr().err


def test_check_messages_invalid_utf8_stdin(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    stdin = io.TextIOWrapper(io.BytesIO(b'{"type": "STATE", "value": "\xff"}\n'), encoding="utf-8")
    monkeypatch.setattr(sys, "stdin", stdin)
    assert _run(monkeypatch, "check-messages", "-") == 1
    assert "Error: <stdin> is not valid UTF-8" in capsys.readouterr().err
