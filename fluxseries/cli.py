# fluxseries/cli.py
import json
import logging
import sys

import click
from dotenv import load_dotenv, find_dotenv

from .errors import FluxSeriesError

load_dotenv(find_dotenv())


def _make_client(ctx):
    from .sdk import Client

    opts = ctx.obj
    try:
        return Client(
            opts["database"],
            host=opts["host"],
            port=opts["port"],
            username=opts["username"],
            password=opts["password"],
        )
    except ValueError as e:
        click.echo(f"ERROR: {e}", err=True)
        sys.exit(2)


def _require_database(client):
    if not client.database:
        click.echo("ERROR: no database provided. Use --database or set FLUXSERIES_DATABASE", err=True)
        sys.exit(2)


@click.group()
@click.option("--host", "-H", envvar="FLUXSERIES_HOST", default=None, help="Server host (default: localhost)")
@click.option("--port", "-P", envvar="FLUXSERIES_PORT", default=None, type=int, help="Server port (default: 8086)")
@click.option("--username", "-u", envvar="FLUXSERIES_USERNAME", default=None, help="User name (default: root)")
@click.option("--password", "-p", envvar="FLUXSERIES_PASSWORD", default=None, help="Password (default: root)")
@click.option("--database", "-d", envvar="FLUXSERIES_DATABASE", default=None, help="Database for series commands")
@click.option("--verbose", "-v", is_flag=True, help="Log HTTP requests")
@click.pass_context
def cli(ctx, host, port, username, password, database, verbose):
    """fluxseries CLI"""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    ctx.obj = {
        "host": host,
        "port": port,
        "username": username,
        "password": password,
        "database": database,
    }


@cli.group()
def databases():
    """Manage databases"""
    pass


@databases.command("list")
@click.pass_context
def list_databases(ctx):
    """
    List databases.
    Example: fluxseries databases list
    """
    client = _make_client(ctx)
    try:
        dbs = client.get_database_list()
    except FluxSeriesError as e:
        click.echo(f"ERROR: {e}", err=True)
        sys.exit(1)

    if not dbs:
        click.echo("No databases found.")
        return
    for db in dbs:
        click.echo(db.get("name", "") if isinstance(db, dict) else str(db))


@databases.command("create")
@click.argument("name")
@click.pass_context
def create_database(ctx, name):
    """
    Create a database.
    Example: fluxseries databases create metrics
    """
    client = _make_client(ctx)
    try:
        client.create_database(name)
    except FluxSeriesError as e:
        click.echo(f"ERROR creating database: {e}", err=True)
        sys.exit(1)
    click.echo(f"Database '{name}' created successfully.")


@databases.command("delete")
@click.argument("name")
@click.option("--yes", "-y", is_flag=True, help="Do not prompt for confirmation")
@click.pass_context
def delete_database(ctx, name, yes):
    """
    Delete a database and all of its series.
    Example: fluxseries databases delete metrics --yes
    """
    if not yes:
        click.echo(f"WARNING: This will delete database '{name}' and all of its data!")
        if not click.confirm("Are you sure you want to continue? This action cannot be undone."):
            click.echo("Aborted.")
            return

    client = _make_client(ctx)
    try:
        client.delete_database(name)
    except FluxSeriesError as e:
        click.echo(f"ERROR deleting database: {e}", err=True)
        sys.exit(1)
    click.echo(f"Database '{name}' deleted successfully.")


@cli.group()
def users():
    """Manage database users"""
    pass


@users.command("create")
@click.option("--database", "-d", "db_name", required=True, help="Database the user gets access to")
@click.option("--name", "-n", required=True, help="User name")
@click.option("--password", "-p", "user_password", required=True, help="User password")
@click.pass_context
def create_user(ctx, db_name, name, user_password):
    """
    Create a database user.
    Example: fluxseries users create --database metrics --name reader --password secret
    """
    client = _make_client(ctx)
    try:
        client.create_database_user(db_name, name, user_password)
    except FluxSeriesError as e:
        click.echo(f"ERROR creating user: {e}", err=True)
        sys.exit(1)
    click.echo(f"User '{name}' created on database '{db_name}'.")


@cli.command("write")
@click.argument("series")
@click.argument("source", type=click.File("r"), default="-")
@click.option("--time-precision", type=click.Choice(["s", "m", "u"]), default=None, help="Precision of time values")
@click.pass_context
def write(ctx, series, source, time_precision):
    """
    Write records from a JSON file (or stdin) to a series.

    The JSON must be a single object or a list of objects.
    Example: echo '[{"host": "a", "value": 1}]' | fluxseries -d metrics write cpu
    """
    client = _make_client(ctx)
    _require_database(client)

    try:
        data = json.load(source)
    except ValueError as e:
        click.echo(f"ERROR: invalid JSON input: {e}", err=True)
        sys.exit(1)

    try:
        client.write_point(series, data, time_precision=time_precision)
    except FluxSeriesError as e:
        click.echo(f"ERROR writing points: {e}", err=True)
        sys.exit(1)
    count = 1 if isinstance(data, dict) else len(data)
    click.echo(f"Wrote {count} point(s) to '{series}'.")


@cli.command("query")
@click.argument("q")
@click.option("--format", "-f", "fmt", type=click.Choice(["json", "table"]), default="json", help="Output format")
@click.option("--time-precision", type=click.Choice(["s", "m", "u"]), default=None, help="Precision of time values")
@click.pass_context
def query(ctx, q, fmt, time_precision):
    """
    Run a query and print the decoded series.
    Example: fluxseries -d metrics query "select * from cpu" --format table
    """
    client = _make_client(ctx)
    _require_database(client)

    def print_series(name, records):
        if fmt == "json":
            click.echo(json.dumps({name: records}))
            return
        from .frames import records_to_dataframe

        click.echo(f"== {name} ({len(records)} point(s))")
        if records:
            click.echo(records_to_dataframe(records, time_column=None).to_string(index=False))

    try:
        client.query(q, visit=print_series, time_precision=time_precision)
    except FluxSeriesError as e:
        click.echo(f"ERROR: {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    cli()
