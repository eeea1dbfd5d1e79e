import json
import logging
import sys
from pathlib import Path
from typing import Optional

import dotenv
import typer
from pydantic import ValidationError

from linkgenesis.core.config import config, load_config_from_env
from linkgenesis.core.alloc import get_test_alloc_accounts
from linkgenesis.core.genesis import GenesisError, init_files, load_genesis
from linkgenesis.core.privval import PrivValidatorError

app = typer.Typer(help="Genesis file tooling for a linkchain node")


def setup_logging(level: str):
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,
    )


@app.callback()
def main(
    env_file: Optional[Path] = typer.Option(None, help="Load LINKGENESIS_* variables from this .env file"),
):
    """Load the configuration before running a command."""
    if env_file is not None:
        if not env_file.exists():
            typer.echo(f"❌ No .env file found at {env_file}", err=True)
            raise typer.Exit(code=1)
        dotenv.load_dotenv(env_file)
    try:
        env_config = load_config_from_env()
    except ValidationError as e:
        typer.echo(f"❌ Invalid LINKGENESIS_* setting: {e}", err=True)
        raise typer.Exit(code=1)
    for field_name in env_config.model_fields_set:
        setattr(config, field_name, getattr(env_config, field_name))
    setup_logging(config.log_level)


@app.command()
def init(
    home: Optional[Path] = typer.Option(None, help="Node home directory"),
    chain_id: Optional[str] = typer.Option(None, help="Chain id for a newly generated genesis file"),
    on_line: Optional[bool] = typer.Option(None, "--online/--offline", help="Production mode skips test accounts"),
):
    """Create the validator key, test keystores and genesis file if missing."""
    overrides = {}
    if home is not None:
        overrides["home"] = home
    if chain_id is not None:
        overrides["chain_id"] = chain_id
    if on_line is not None:
        overrides["on_line"] = on_line
    cfg = config.model_copy(update=overrides)

    try:
        gen_doc = init_files(cfg)
    except (GenesisError, PrivValidatorError, OSError) as e:
        typer.echo(f"❌ {e}", err=True)
        raise typer.Exit(code=1)

    typer.echo(f"✅ Genesis file ready at {cfg.genesis_path}")
    typer.echo(f"   chain_id: {gen_doc.chain_id}")


@app.command()
def validate(path: Optional[Path] = typer.Argument(None, help="Genesis file, defaults to the configured one")):
    """Load a genesis file and report whether it is valid."""
    try:
        gen_doc = load_genesis(path, config)
    except GenesisError as e:
        typer.echo(f"❌ {e}", err=True)
        raise typer.Exit(code=1)

    typer.echo(f"✅ {path or config.genesis_path} is valid")
    typer.echo(f"   chain_id:     {gen_doc.chain_id}")
    typer.echo(f"   genesis_time: {gen_doc.genesis_time}")
    typer.echo(f"   validators:   {len(gen_doc.validators)}")
    typer.echo(f"   accounts:     {len(gen_doc.accounts or {})}")


@app.command()
def show(path: Optional[Path] = typer.Argument(None, help="Genesis file, defaults to the configured one")):
    """Print the completed genesis document as JSON."""
    try:
        gen_doc = load_genesis(path, config)
    except GenesisError as e:
        typer.echo(f"❌ {e}", err=True)
        raise typer.Exit(code=1)

    typer.echo(gen_doc.to_json(), nl=False)


@app.command("test-alloc")
def test_alloc():
    """Print the test alloc map as JSON."""
    accounts = {addr: account.to_dict() for addr, account in get_test_alloc_accounts().items()}
    typer.echo(json.dumps(accounts, indent=2))


if __name__ == "__main__":
    app()
