"""Tests for the txvault CLI."""
import json

from click.testing import CliRunner

from txvault.cli import cli


def _seal(runner, payload='{"amount": 100, "currency": "AED"}'):
    result = runner.invoke(cli, ["seal", "--party-id", "party_cli", "--payload", payload])
    assert result.exit_code == 0, result.output
    return json.loads(result.output)


def test_keygen():
    result = CliRunner().invoke(cli, ["keygen"])
    assert result.exit_code == 0
    key = result.output.strip()
    assert len(key) == 64
    int(key, 16)


def test_seal_then_open(tmp_path):
    runner = CliRunner()
    record = _seal(runner)
    assert record["partyId"] == "party_cli"
    assert record["alg"] == "AES-256-GCM"

    path = tmp_path / "record.json"
    path.write_text(json.dumps(record))
    result = runner.invoke(cli, ["open", str(path)])
    assert result.exit_code == 0, result.output
    assert json.loads(result.output) == {"amount": 100, "currency": "AED"}


def test_open_from_stdin():
    runner = CliRunner()
    record = _seal(runner, "[1, 2, 3]")
    result = runner.invoke(cli, ["open"], input=json.dumps(record))
    assert result.exit_code == 0, result.output
    assert json.loads(result.output) == [1, 2, 3]


def test_seal_from_file(tmp_path):
    path = tmp_path / "payload.json"
    path.write_text('{"k": "v"}')
    result = CliRunner().invoke(cli, ["seal", "--party-id", "p", "--file", str(path)])
    assert result.exit_code == 0, result.output
    assert json.loads(result.output)["partyId"] == "p"


def test_seal_invalid_json():
    result = CliRunner().invoke(cli, ["seal", "--party-id", "p", "--payload", "{nope"])
    assert result.exit_code == 1
    assert "Invalid JSON payload" in result.output


def test_seal_requires_one_payload_source():
    result = CliRunner().invoke(cli, ["seal", "--party-id", "p"])
    assert result.exit_code == 1
    assert "Exactly one of --payload or --file" in result.output


def test_open_tampered_record():
    runner = CliRunner()
    record = _seal(runner)
    record["payload_tag"] = "ff" * 16

    result = runner.invoke(cli, ["open"], input=json.dumps(record))
    assert result.exit_code == 1
    assert "DECRYPT_FAILED" in result.output


def test_open_invalid_length():
    runner = CliRunner()
    record = _seal(runner)
    record["payload_nonce"] = "00" * 10

    result = runner.invoke(cli, ["open"], input=json.dumps(record))
    assert result.exit_code == 1
    assert "VALIDATION_ERROR: payload_nonce must be 12 bytes, got 10 bytes" in result.output


def test_open_incomplete_record():
    result = CliRunner().invoke(cli, ["open"], input=json.dumps({"id": "x"}))
    assert result.exit_code == 1
    assert "Invalid record" in result.output
