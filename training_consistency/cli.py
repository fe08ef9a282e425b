"""
Training Consistency CLI

Command-line interface for scoring exercise consistency.

Usage:
    training-consistency score --user-id ID [--reference-date DATE] [--sessions FILE] [--format text|json]
    training-consistency import FILE
    training-consistency status
    training-consistency prune [--days N]
    training-consistency config [--key KEY] [--value VALUE]
"""

import json
import logging
import sys
from datetime import datetime, timedelta, timezone

import click

from training_consistency.config.defaults import RETENTION_DAYS
from training_consistency.config.schema import STORED_KEYS


def _setup_logging(verbose: bool):
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _open_storage(db_path: str | None):
    from training_consistency.config.schema import ConsistencyConfig
    from training_consistency.core.storage import ConsistencyStorage

    return ConsistencyStorage(db_path=ConsistencyConfig(db_path=db_path).get_db_path())


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, verbose: bool):
    """Training Consistency - exercise consistency scoring"""
    _setup_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose


@cli.command()
@click.option("--user-id", "-u", default=None, help="User whose sessions to score")
@click.option("--reference-date", "-r", default=None, help="ISO-8601 date the window ends on (default: now)")
@click.option("--sessions", "-s", "sessions_path", default=None, type=click.Path(dir_okay=False),
              help="Score from a JSON/JSONL session export instead of the local store")
@click.option("--db", "db_path", default=None, help="SQLite database path")
@click.option("--format", "output_format", default=None, type=click.Choice(["text", "json"]))
@click.pass_context
def score(ctx, user_id, reference_date, sessions_path, db_path, output_format):
    """Compute the 28-day consistency score for a user."""
    from training_consistency.config.schema import ConsistencyConfig
    from training_consistency.core.engine import ConsistencyEngine
    from training_consistency.core.errors import InvalidInput, StorageUnavailable
    from training_consistency.readers.json_reader import JsonSessionReader
    from training_consistency.readers.storage_reader import StorageSessionReader

    storage = None
    try:
        storage = _open_storage(db_path)
        config = ConsistencyConfig.from_storage(storage)
        if sessions_path:
            reader = JsonSessionReader(sessions_path)
        else:
            reader = StorageSessionReader(storage)

        engine = ConsistencyEngine(reader=reader, config=config)
        result = engine.score_request(user_id, reference_date)
    except InvalidInput as e:
        click.echo("Error: Validation failed", err=True)
        for error in e.errors:
            click.echo(f"  - {error}", err=True)
        sys.exit(2)
    except StorageUnavailable as e:
        if ctx.obj.get("verbose"):
            click.echo(f"Error: {e}", err=True)
        else:
            click.echo("Error: Failed to calculate consistency score", err=True)
        sys.exit(1)
    finally:
        if storage is not None:
            storage.close()

    output_format = output_format or config.default_format
    if output_format == "json":
        payload = {"success": True, "userId": user_id.strip(), **result.to_dict()}
        click.echo(json.dumps(payload, indent=2))
    else:
        from training_consistency.insights.generator import ExplanationGenerator

        click.echo(ExplanationGenerator().format_digest(
            result, user_id=user_id.strip(), show_breakdown=ctx.obj.get("verbose", False),
        ))


@cli.command(name="import")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--db", "db_path", default=None, help="SQLite database path")
def import_sessions(path, db_path):
    """Import a JSON/JSONL session export into the local store."""
    from training_consistency.core.errors import StorageUnavailable
    from training_consistency.readers.json_reader import JsonSessionReader

    storage = None
    try:
        storage = _open_storage(db_path)
        count = storage.save_sessions(JsonSessionReader(path).iter_records())
    except StorageUnavailable as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    finally:
        if storage is not None:
            storage.close()

    click.echo(f"Imported {count} sessions from {path}")


@cli.command()
@click.option("--db", "db_path", default=None, help="SQLite database path")
def status(db_path):
    """Show the local store and its users."""
    from training_consistency.core.errors import StorageUnavailable

    storage = None
    try:
        storage = _open_storage(db_path)
        users = storage.list_users()
        click.echo("\n  Training Consistency - Store Status\n")
        click.echo(f"  DB path: {storage.db_path}")
        click.echo(f"  Sessions: {storage.get_session_count()}")
        if users:
            click.echo("  Users:")
            for user in users:
                click.echo(f"    {user:<30} {storage.get_session_count(user):>6} sessions")
        else:
            click.echo("  No sessions imported yet. Run 'training-consistency import FILE'.")
        click.echo()
    except StorageUnavailable as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    finally:
        if storage is not None:
            storage.close()


@cli.command()
@click.option("--days", "-d", default=RETENTION_DAYS, type=click.IntRange(min=1),
              help="Keep sessions that started within this many days")
@click.option("--db", "db_path", default=None, help="SQLite database path")
def prune(days, db_path):
    """Delete stored sessions older than the retention period."""
    from training_consistency.core.errors import StorageUnavailable

    cutoff = datetime.now(timezone.utc) - timedelta(days=days)
    storage = None
    try:
        storage = _open_storage(db_path)
        deleted = storage.delete_sessions_before(cutoff)
    except StorageUnavailable as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    finally:
        if storage is not None:
            storage.close()

    click.echo(f"Deleted {deleted} sessions older than {cutoff.date().isoformat()}")


@cli.command()
@click.option("--key", "-k", help="Config key to get/set")
@click.option("--value", "-V", help="Config value to set")
@click.option("--db", "db_path", default=None, help="SQLite database path")
def config(key, value, db_path):
    """View or update stored configuration."""
    from pydantic import ValidationError

    from training_consistency.config.schema import ConsistencyConfig
    from training_consistency.core.errors import StorageUnavailable

    if key and key not in STORED_KEYS:
        raise click.BadParameter(
            f"Unknown config key: {key}. Supported: {', '.join(STORED_KEYS)}",
            param_hint="--key",
        )

    storage = None
    try:
        storage = _open_storage(db_path)
        if key and value:
            try:
                ConsistencyConfig.from_storage(storage, **{key: value})
            except ValidationError as e:
                raise click.BadParameter(str(e), param_hint="--value")
            storage.set_config(key, value)
            click.echo(f"Set {key} = {value}")
        elif key:
            val = storage.get_config(key)
            if val:
                click.echo(f"{key} = {val}")
            else:
                click.echo(f"{key} is not set")
        else:
            current = ConsistencyConfig.from_storage(storage)
            click.echo("\n  Training Consistency Configuration")
            click.echo(f"  DB path: {storage.db_path}")
            click.echo(f"  Max future days: {current.max_future_days}")
            click.echo(f"  Max past years: {current.max_past_years}")
            click.echo(f"  Default format: {current.default_format}")
            click.echo()
    except StorageUnavailable as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    finally:
        if storage is not None:
            storage.close()


if __name__ == "__main__":
    cli()
