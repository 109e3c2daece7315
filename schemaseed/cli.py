"""CLI for schemaseed schema compilation and database bootstrap."""

from pathlib import Path

import typer

from schemaseed import __version__
from schemaseed.config import SchemaseedConfig, find_config, load_config
from schemaseed.loaders import load_entity_file
from schemaseed.sql.compiler import compile_schema, render_script
from schemaseed.validation import SchemaseedError


def version_callback(value: bool):
    """Print version and exit."""
    if value:
        typer.echo(f"schemaseed {__version__}")
        raise typer.Exit()


app = typer.Typer(
    help="Schemaseed: entity model to SQL schema, plus a seeded database container",
    no_args_is_help=True,
)

# Global state for config (set in callback, used in commands)
_loaded_config: SchemaseedConfig | None = None


@app.callback()
def main(
    version: bool = typer.Option(
        None, "--version", "-v", callback=version_callback, is_eager=True, help="Show version"
    ),
    config: Path = typer.Option(None, "--config", "-c", help="Path to config file (schemaseed.yaml)"),
):
    """Schemaseed CLI.

    You can use a config file (schemaseed.yaml or schemaseed.json) to set default values.
    CLI arguments override config file values.
    """
    global _loaded_config

    config_path = config or find_config()

    if config_path:
        try:
            _loaded_config = load_config(config_path)
            typer.echo(f"Loaded config from: {config_path}", err=True)
        except (SchemaseedError, FileNotFoundError) as e:
            typer.echo(f"Warning: Failed to load config: {e}", err=True)
            _loaded_config = None
    else:
        _loaded_config = None


def _current_config() -> SchemaseedConfig:
    return _loaded_config or SchemaseedConfig().resolve_paths()


def _entities_path(entities: Path | None) -> Path:
    if entities is not None:
        return entities
    return Path(_current_config().entities_file)


def _load(entities: Path | None):
    path = _entities_path(entities)
    if not path.exists():
        typer.echo(f"Error: Entity file {path} does not exist", err=True)
        raise typer.Exit(1)
    try:
        return load_entity_file(path)
    except SchemaseedError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


@app.command("compile")
def compile_command(
    entities: Path = typer.Argument(None, help="Entity file (defaults to entities_file from config)"),
    database: str = typer.Option(None, "--database", "-d", help="Database name (defaults to config, then myappdb)"),
    output: Path = typer.Option(None, "--output", "-o", help="Write the script here instead of stdout"),
    dialect: str = typer.Option("mysql", "--dialect", help="Target SQL dialect (translated with SQLGlot)"),
    order: str = typer.Option(None, "--order", help="Table order: declaration or dependency"),
    resolve_junction_keys: bool = typer.Option(
        None,
        "--resolve-junction-keys/--no-resolve-junction-keys",
        help="Reference actual primary key columns from junction tables",
    ),
):
    """
    Compile an entity file into a SQL init script.

    Examples:
      schemaseed compile entities.yml
      schemaseed compile entities.yml -d analytics -o init_db.sql
      schemaseed compile entities.yml --order dependency --dialect postgres
    """
    from schemaseed.sql.dialect import transpile_statements

    config = _current_config()
    model = _load(entities)

    try:
        statements = compile_schema(
            model,
            database or config.database.name,
            order=order or config.order,
            resolve_junction_keys=config.resolve_junction_keys if resolve_junction_keys is None else resolve_junction_keys,
        )
        statements = transpile_statements(statements, dialect)
    except (SchemaseedError, ValueError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    script = render_script(statements)
    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(script)
        typer.echo(f"✓ Wrote {len(statements)} statements to {output}", err=True)
    else:
        typer.echo(script, nl=False)


@app.command()
def validate(
    entities: Path = typer.Argument(None, help="Entity file (defaults to entities_file from config)"),
):
    """
    Validate an entity file and check that its compiled SQL parses.

    Examples:
      schemaseed validate
      schemaseed validate entities.yml
    """
    from schemaseed.sql.dialect import parse_statements

    config = _current_config()
    model = _load(entities)

    try:
        statements = compile_schema(
            model, config.database.name, order=config.order, resolve_junction_keys=config.resolve_junction_keys
        )
        parse_statements(statements)
    except SchemaseedError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(
        f"✓ {len(model.entities)} entities and {len(model.relationships)} relationships are valid "
        f"({len(statements)} statements)"
    )


@app.command()
def info(
    entities: Path = typer.Argument(None, help="Entity file (defaults to entities_file from config)"),
):
    """
    Show quick info about an entity model.

    Examples:
      schemaseed info
      schemaseed info entities.yml
    """
    model = _load(entities)

    path = _entities_path(entities)
    typer.echo(f"\nEntity Model: {path}\n")

    for entity in model.entities:
        primary_key = entity.primary_key
        typer.echo(f"● {entity.name}")
        typer.echo(f"  Table: {entity.table_name}")
        typer.echo(f"  Properties: {len(entity.properties)}")
        typer.echo(f"  Primary key: {primary_key.name if primary_key else 'N/A'}")
        if entity.foreign_keys:
            refs = [f"{prop.name} -> {prop.foreign_key}" for prop in entity.foreign_keys]
            typer.echo(f"  References: {', '.join(refs)}")
        typer.echo()

    for relationship in model.relationships:
        typer.echo(f"◆ {relationship.table}")
        typer.echo(f"  {relationship.entity_a}.{relationship.column_a} <-> {relationship.entity_b}.{relationship.column_b}")
        typer.echo()


@app.command("export-schema")
def export_schema_command(
    output: Path = typer.Argument(Path("schemaseed-schema.json"), help="Where to write the JSON Schema"),
):
    """
    Export a JSON Schema for entity files, for YAML editor completion.

    Examples:
      schemaseed export-schema
      schemaseed export-schema schemas/entities.json
    """
    from schemaseed.schema import export_schema

    path = export_schema(output)
    typer.echo(f"✓ JSON Schema exported to: {path}")
    typer.echo("\nAdd this to the top of your YAML files:")
    typer.echo(f"# yaml-language-server: $schema=./{path.name}")


@app.command()
def up(
    entities: Path = typer.Argument(None, help="Entity file (defaults to entities_file from config)"),
):
    """
    Start a database container seeded with the compiled schema.

    Finds a free port, creates or reuses credentials, writes the SQL script
    and compose file, starts the container, waits until it is ready, and
    writes application.properties.

    Examples:
      schemaseed up
      schemaseed --config schemaseed.yaml up entities.yml
    """
    import logging

    from schemaseed.bootstrap import bootstrap

    logging.basicConfig(level=logging.INFO)

    config = _current_config()
    model = _load(entities)

    try:
        result = bootstrap(config, model)
    except SchemaseedError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"✓ Database '{result.database}' is ready on port {result.port}")
    typer.echo(f"  SQL script: {result.sql_script} ({result.statement_count} statements)")
    typer.echo(f"  Compose file: {result.compose_file}")
    typer.echo(f"  Application properties: {result.app_properties_file}")
    typer.echo(
        f"\nRemember to add '{result.app_properties_file.name}', '{result.sql_script.name}' and the "
        f"log directory to your .gitignore to keep credentials out of version control."
    )


if __name__ == "__main__":
    app()
