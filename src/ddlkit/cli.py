"""
Command-line interface for ddlkit.
"""

import asyncio
import sys
from functools import wraps
from typing import List, Optional

import click
from rich.console import Console
from rich.table import Table

from . import __version__
from .alteration import ModelChange
from .config import DdlKitConfig, DatabaseConfig
from .database.connection import ConnectionPool
from .database.introspection import PostgresMetadataSource
from .exceptions import ConfigurationError, DdlKitError
from .logging_setup import setup_logging
from .model import Database
from .platform import Platform, PlatformFactory, PostgreSqlPlatform
from .schema_file import dump_schema_yaml, load_schema


console = Console()


def handle_errors(func):
    """Decorator to handle errors gracefully in CLI commands."""
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except DdlKitError as e:
            console.print(f"[red]Error:[/red] {e}")
            sys.exit(1)
        except KeyboardInterrupt:
            console.print("\n[yellow]Interrupted by user[/yellow]")
            sys.exit(0)
        except Exception as e:
            console.print(f"[red]Unexpected error:[/red] {e}")
            if "--debug" in sys.argv:
                import traceback
                traceback.print_exc()
            sys.exit(1)
    return wrapper


def _create_platform(name: str, delimited: bool = False, case_sensitive: bool = False) -> Platform:
    return PlatformFactory.create_new_platform_instance(
        name, use_delimited_identifiers=delimited, case_sensitive=case_sensitive
    )


def _write_output(text: str, output: Optional[str]) -> None:
    if output:
        with open(output, "w", encoding="utf-8") as f:
            f.write(text)
        console.print(f"[green]✓[/green] Written to {output}")
    else:
        click.echo(text, nl=False)


def _display_changes(changes: List[ModelChange]) -> None:
    table = Table(title="Schema changes")
    table.add_column("Phase", justify="right")
    table.add_column("Type", style="cyan")
    table.add_column("Table", style="yellow")
    table.add_column("Description")
    for change in changes:
        table.add_row(str(change.phase), change.change_type.value, change.table_name, change.describe())
    console.print(table)


def _load_config(config: str, debug: bool) -> DdlKitConfig:
    ddl_config = DdlKitConfig.from_yaml(config)
    setup_logging(ddl_config.logging, debug or ddl_config.debug)
    return ddl_config


def _live_platform(db_config: DatabaseConfig, ddl_config: DdlKitConfig) -> Platform:
    platform = _create_platform(
        db_config.get_platform_name(),
        ddl_config.generation.delimited_identifiers,
        ddl_config.generation.case_sensitive,
    )
    if not isinstance(platform, PostgreSqlPlatform):
        raise ConfigurationError(
            f"Reading live databases is only supported for PostgreSQL, "
            f"database '{db_config.name}' uses {platform.name}",
            {"database": db_config.name},
        )
    return platform


async def _read_live_model(
    pool: ConnectionPool, platform: Platform, db_config: DatabaseConfig, ddl_config: DdlKitConfig
) -> Database:
    source = PostgresMetadataSource(pool, db_config.schema_name or "public")
    return await platform.read_model_from_database(
        source,
        name=db_config.name,
        catalog=ddl_config.reading.catalog,
        schema=db_config.schema_name or ddl_config.reading.schema_pattern,
        table_types=ddl_config.reading.table_types,
    )


@click.group()
@click.version_option(__version__)
@click.option(
    "--debug", is_flag=True, help="Enable debug mode"
)
@click.pass_context
def main(ctx, debug):
    """ddlkit: cross-database schema definition and migration toolkit."""
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug


@main.command()
@handle_errors
def platforms():
    """List the supported database platforms."""
    table = Table(title="Supported platforms")
    table.add_column("Name", style="cyan")
    table.add_column("URL schemes")
    table.add_column("Max identifier length", justify="right")
    table.add_column("Identity columns")

    for name in PlatformFactory.get_supported_platforms():
        platform = PlatformFactory.create_new_platform_instance(name)
        max_length = platform.info.max_identifier_length
        table.add_row(
            platform.name,
            ", ".join(platform.URL_SCHEMES),
            str(max_length) if max_length > 0 else "unlimited",
            "yes" if platform.info.auto_increment_uses_identity else "no",
        )
    console.print(table)


@main.command("create-sql")
@click.argument("schema", type=click.Path(exists=True))
@click.option("--platform", "-p", "platform_name", required=True, help="Target platform")
@click.option("--drop-first", is_flag=True, help="Drop the tables before creating them")
@click.option("--delimited", is_flag=True, help="Quote all identifiers")
@click.option("--output", "-o", type=click.Path(), help="Write the SQL to a file")
@handle_errors
def create_sql(schema: str, platform_name: str, drop_first: bool, delimited: bool, output: Optional[str]):
    """Generate the DDL creating a schema file's tables."""
    database = load_schema(schema)
    platform = _create_platform(platform_name, delimited)
    _write_output(platform.get_create_tables_sql(database, drop_first), output)


@main.command("drop-sql")
@click.argument("schema", type=click.Path(exists=True))
@click.option("--platform", "-p", "platform_name", required=True, help="Target platform")
@click.option("--delimited", is_flag=True, help="Quote all identifiers")
@click.option("--output", "-o", type=click.Path(), help="Write the SQL to a file")
@handle_errors
def drop_sql(schema: str, platform_name: str, delimited: bool, output: Optional[str]):
    """Generate the DDL dropping a schema file's tables."""
    database = load_schema(schema)
    platform = _create_platform(platform_name, delimited)
    _write_output(platform.get_drop_tables_sql(database), output)


@main.command()
@click.argument("current", type=click.Path(exists=True))
@click.argument("desired", type=click.Path(exists=True))
@click.option("--platform", "-p", "platform_name", required=True, help="Target platform")
@click.option("--no-drops", is_flag=True, help="Keep tables and columns missing from DESIRED")
@click.option("--no-modify", is_flag=True, help="Leave existing columns unchanged")
@click.option("--case-sensitive", is_flag=True, help="Compare names case sensitively")
@click.option("--output", "-o", type=click.Path(), help="Write the SQL to a file")
@handle_errors
def diff(
    current: str,
    desired: str,
    platform_name: str,
    no_drops: bool,
    no_modify: bool,
    case_sensitive: bool,
    output: Optional[str],
):
    """Generate the DDL migrating schema file CURRENT to schema file DESIRED."""
    current_model = load_schema(current)
    desired_model = load_schema(desired)
    platform = _create_platform(platform_name, case_sensitive=case_sensitive)

    changes = platform.get_changes(current_model, desired_model, not no_drops, not no_modify)
    if not changes:
        console.print("[green]✓[/green] Schemas are equal, nothing to do")
        return

    if output:
        _display_changes(changes)
    _write_output(
        platform.get_alter_tables_sql(current_model, desired_model, not no_drops, not no_modify),
        output,
    )


@main.command()
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True),
    required=True,
    help="Configuration file path",
)
@click.option("--database", required=True, help="Database name")
@click.option("--output", "-o", type=click.Path(), help="Write the schema to a file")
@click.pass_context
@handle_errors
def dump(ctx, config: str, database: str, output: Optional[str]):
    """Read a live database schema into a schema file."""
    ddl_config = _load_config(config, ctx.obj["debug"])
    db_config = ddl_config.get_database(database)
    platform = _live_platform(db_config, ddl_config)

    async def run_dump() -> Database:
        async with ConnectionPool(db_config.to_connection_config()) as pool:
            return await _read_live_model(pool, platform, db_config, ddl_config)

    model = asyncio.run(run_dump())
    _write_output(dump_schema_yaml(model), output)


@main.command()
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True),
    required=True,
    help="Configuration file path",
)
@click.option("--database", required=True, help="Database name")
@click.argument("schema", type=click.Path(exists=True))
@click.option("--execute", is_flag=True, help="Execute the statements instead of printing them")
@click.pass_context
@handle_errors
def alter(ctx, config: str, database: str, schema: str, execute: bool):
    """Migrate a live database to the tables of SCHEMA."""
    ddl_config = _load_config(config, ctx.obj["debug"])
    db_config = ddl_config.get_database(database)
    platform = _live_platform(db_config, ddl_config)
    desired = load_schema(schema)
    generation = ddl_config.generation

    async def run_alter():
        async with ConnectionPool(db_config.to_connection_config()) as pool:
            current = await _read_live_model(pool, platform, db_config, ddl_config)
            changes = platform.get_changes(
                current, desired, generation.do_drops, generation.modify_columns
            )
            sql = platform.get_alter_tables_sql(
                current, desired, generation.do_drops, generation.modify_columns
            )
            if not execute:
                return changes, sql, None

            executor = platform.create_executor(pool, dry_run=ddl_config.dry_run)
            result = await executor.execute(sql, generation.continue_on_error)
            return changes, sql, result

    changes, sql, result = asyncio.run(run_alter())
    if not changes:
        console.print("[green]✓[/green] Database already matches the schema")
        return

    _display_changes(changes)
    if result is None:
        click.echo(sql, nl=False)
        return

    console.print(
        f"Executed {result.succeeded} of {len(result.statements)} statements "
        f"in {result.execution_time_ms:.0f}ms"
    )
    for error in result.errors:
        console.print(f"  [red]✗[/red] {error}")
    if not result.success:
        sys.exit(1)


@main.command()
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True),
    required=True,
    help="Configuration file path",
)
@click.pass_context
@handle_errors
def validate_config(ctx, config: str):
    """Validate configuration file."""
    console.print(f"Validating configuration: {config}")

    try:
        ddl_config = _load_config(config, ctx.obj["debug"])
        ddl_config.validate_config()

        console.print("[green]✓[/green] Configuration is valid")

        # Display configuration summary
        _display_config_summary(ddl_config)

    except ConfigurationError as e:
        console.print(f"[red]✗[/red] Configuration error: {e}")
        sys.exit(1)


def _display_config_summary(config: DdlKitConfig) -> None:
    """Display a summary of the configuration."""
    table = Table(title="Databases")
    table.add_column("Name", style="cyan")
    table.add_column("Platform")
    table.add_column("Schema")
    for db in config.databases:
        table.add_row(db.name, db.get_platform_name(), db.schema_name or "-")
    console.print(table)

    generation = config.generation
    console.print(f"Delimited identifiers: {generation.delimited_identifiers}")
    console.print(f"Drops: {generation.do_drops}, column modifications: {generation.modify_columns}")
    console.print(f"Continue on error: {generation.continue_on_error}")


if __name__ == "__main__":
    main()
