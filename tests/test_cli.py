import json
import os

import pytest
from typer.testing import CliRunner

from linkgenesis.cli.main import app
from linkgenesis.core.config import config

runner = CliRunner()


@pytest.fixture(autouse=True)
def restore_config(monkeypatch):
    """The CLI callback writes environment settings into the global config."""
    for field_name in type(config).model_fields:
        monkeypatch.setattr(config, field_name, getattr(config, field_name))


def parse_json_output(output: str):
    return json.loads(output[output.index("{"):])


def test_init_validate_and_show(tmp_path):
    home = tmp_path / "node"

    result = runner.invoke(app, ["init", "--home", str(home), "--chain-id", "my-chain", "--offline"])
    assert result.exit_code == 0, result.output
    assert "my-chain" in result.output

    genesis_file = home / "config" / "genesis.json"
    assert genesis_file.exists()

    result = runner.invoke(app, ["validate", str(genesis_file)])
    assert result.exit_code == 0, result.output
    assert "is valid" in result.output
    assert "validators:   1" in result.output

    result = runner.invoke(app, ["show", str(genesis_file)])
    assert result.exit_code == 0, result.output
    data = parse_json_output(result.output)
    assert data["chain_id"] == "my-chain"
    assert "0x54fb1c7d0f011dd63b08f85ed7b518ab82028100" in data["accounts"]


def test_validate_uses_configured_genesis_file(tmp_path, monkeypatch):
    runner.invoke(app, ["init", "--home", str(tmp_path), "--chain-id", "env-chain"])
    monkeypatch.setenv("LINKGENESIS_HOME", str(tmp_path))

    result = runner.invoke(app, ["validate"])

    assert result.exit_code == 0, result.output
    assert "env-chain" in result.output


def test_validate_reports_errors(tmp_path):
    path = tmp_path / "genesis.json"
    path.write_text(json.dumps({"chain_id": "c", "validators": []}))

    result = runner.invoke(app, ["validate", str(path)])

    assert result.exit_code == 1
    assert "at least one validator" in result.output


def test_env_file(tmp_path, monkeypatch):
    # load_dotenv writes into os.environ
    monkeypatch.setattr(os, "environ", dict(os.environ))
    monkeypatch.delenv("LINKGENESIS_HOME", raising=False)
    monkeypatch.delenv("LINKGENESIS_CHAIN_ID", raising=False)
    env_file = tmp_path / ".env"
    env_file.write_text(f"LINKGENESIS_HOME={tmp_path / 'node'}\nLINKGENESIS_CHAIN_ID=dotenv-chain\n")

    result = runner.invoke(app, ["--env-file", str(env_file), "init"])

    assert result.exit_code == 0, result.output
    assert "dotenv-chain" in result.output
    assert (tmp_path / "node" / "config" / "genesis.json").exists()


def test_missing_env_file(tmp_path):
    result = runner.invoke(app, ["--env-file", str(tmp_path / "nope.env"), "test-alloc"])
    assert result.exit_code == 1


def test_test_alloc():
    result = runner.invoke(app, ["test-alloc"])

    assert result.exit_code == 0, result.output
    data = parse_json_output(result.output)
    assert data["0xa73810e519e1075010678d706533486d8ecc8000"] == {"balance": "1" + "0" * 34, "nonce": 0}


def test_init_reports_corrupt_priv_validator(tmp_path):
    key_file = tmp_path / "config" / "priv_validator.json"
    key_file.parent.mkdir(parents=True)
    key_file.write_text("not json")

    result = runner.invoke(app, ["init", "--home", str(tmp_path), "--online"])

    assert result.exit_code == 1
    assert not isinstance(result.exception, ValueError)
    assert "malformed private validator file" in result.output


def test_invalid_env_value(monkeypatch):
    monkeypatch.setenv("LINKGENESIS_LOG_LEVEL", "LOUD")

    result = runner.invoke(app, ["test-alloc"])

    assert result.exit_code == 1
    assert "❌" in result.output
