"""CLI for the Transaction Vault."""
import json
import sys
from typing import Optional

import click
from pydantic import ValidationError as RecordParseError

from txvault.domain.envelope.cipher import get_envelope_cipher
from txvault.domain.envelope.errors import EnvelopeError
from txvault.domain.envelope.master_key import generate_master_key_hex
from txvault.domain.envelope.models import SealedRecord


def _fail(message: str) -> None:
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


@click.group()
def cli():
    """Transaction Vault CLI."""
    pass


@cli.command()
def keygen():
    """Print a fresh 32-byte master key as hex (for MASTER_KEY_HEX)."""
    click.echo(generate_master_key_hex())


@cli.command()
@click.option("--party-id", required=True, help="Owner/party identifier")
@click.option("--payload", default=None, help="JSON object to encrypt")
@click.option("--file", "payload_file", type=click.File("r"), default=None,
              help="Read the JSON payload from a file ('-' for stdin)")
def seal(party_id: str, payload: Optional[str], payload_file):
    """Seal a JSON payload and print the record as JSON."""
    if (payload is None) == (payload_file is None):
        _fail("Exactly one of --payload or --file is required")

    raw = payload if payload is not None else payload_file.read()
    try:
        value = json.loads(raw)
    except json.JSONDecodeError as e:
        _fail(f"Invalid JSON payload: {e.msg}")

    try:
        record = get_envelope_cipher().seal(party_id, value)
    except EnvelopeError as e:
        _fail(str(e))

    click.echo(json.dumps(record.to_dict(), indent=2))


@cli.command("open")
@click.argument("record_file", type=click.File("r"), default="-")
def open_record(record_file):
    """Open a sealed record (JSON file or stdin) and print its payload."""
    try:
        record = SealedRecord.from_dict(json.load(record_file))
    except (json.JSONDecodeError, TypeError) as e:
        _fail(f"Invalid record JSON: {e}")
    except RecordParseError as e:
        _fail(f"Invalid record: {e.error_count()} field error(s)")

    try:
        payload = get_envelope_cipher().open(record)
    except EnvelopeError as e:
        _fail(str(e))

    click.echo(json.dumps(payload, indent=2, ensure_ascii=False))


@cli.command("init-db")
def init_db_command():
    """Create database tables from the ORM metadata."""
    from txvault.adapters.postgres.session import init_db
    init_db()
    click.echo("✓ Database tables created")


@cli.command()
@click.option("--host", default=None, help="Bind host (default: HOST setting)")
@click.option("--port", default=None, type=int, help="Bind port (default: PORT setting)")
@click.option("--reload", is_flag=True, help="Auto-reload on code changes")
def serve(host: Optional[str], port: Optional[int], reload: bool):
    """Run the HTTP API under uvicorn."""
    import uvicorn
    from txvault.settings import settings

    uvicorn.run(
        "txvault.main:app",
        host=host or settings.HOST,
        port=port or settings.PORT,
        reload=reload,
    )


def main():
    cli()


if __name__ == "__main__":
    main()
