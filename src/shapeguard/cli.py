# src/shapeguard/cli.py
"""shapeguard Command Line Interface.

Entry point for the shapeguard CLI tool.
"""

import json
from pathlib import Path
from typing import Any

import typer
from pydantic import ValidationError

from shapeguard import __version__
from shapeguard.contracts import UnknownTypePolicy, definition_to_dict
from shapeguard.core.config import ShapeguardSettings, load_settings, resolve_config
from shapeguard.core.logging import configure_logging
from shapeguard.errors import SchemaSyntaxError
from shapeguard.plugins import PluginRegistry
from shapeguard.schema_text import SchemaTextValidator, parse_schema

app = typer.Typer(
    name="shapeguard",
    help="shapeguard: validate JSON values against interface-style schema text.",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"shapeguard version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """shapeguard: validate JSON values against interface-style schema text."""
    # Commands that load settings reconfigure with the configured level
    configure_logging()


def _load_settings_or_exit(settings: str | None) -> ShapeguardSettings:
    try:
        return load_settings(Path(settings) if settings else None)
    except FileNotFoundError:
        typer.echo(f"Error: Settings file not found: {settings}", err=True)
        raise typer.Exit(1) from None
    except ValidationError as e:
        typer.echo("Configuration errors:", err=True)
        for error in e.errors():
            loc = ".".join(str(x) for x in error["loc"])
            typer.echo(f"  - {loc}: {error['msg']}", err=True)
        raise typer.Exit(1) from None


def _apply_overrides(
    config: ShapeguardSettings,
    *,
    strict: bool,
    reject_unknown: bool,
    no_dates: bool,
) -> ShapeguardSettings:
    """Layer command-line flags over loaded settings (flags only ever tighten)."""
    parser_updates: dict[str, Any] = {}
    if strict:
        parser_updates["strict_syntax"] = True
    if reject_unknown:
        parser_updates["unknown_types"] = UnknownTypePolicy.REJECT

    updates: dict[str, Any] = {}
    if parser_updates:
        updates["parser"] = config.parser.model_copy(update=parser_updates)
    if no_dates:
        updates["matcher"] = config.matcher.model_copy(update={"coerce_dates": False})
    return config.model_copy(update=updates) if updates else config


def _read_text_or_exit(path: str, what: str) -> str:
    try:
        return Path(path).read_text(encoding="utf-8")
    except FileNotFoundError:
        typer.echo(f"Error: {what} file not found: {path}", err=True)
        raise typer.Exit(1) from None
    except OSError as e:
        typer.echo(f"Error: Cannot read {what.lower()} file {path}: {e}", err=True)
        raise typer.Exit(1) from None


def _build_registry() -> PluginRegistry:
    """Registry with built-in plugins plus any installed entry-point plugins."""
    registry = PluginRegistry()
    registry.register_builtin_plugins()
    registry.load_entrypoint_plugins()
    return registry


@app.command()
def validate(
    schema: str = typer.Option(
        ...,
        "--schema",
        "-s",
        help="Path to schema text file.",
    ),
    input_path: str = typer.Option(
        ...,
        "--input",
        "-i",
        help="Path to JSON file holding the value to validate.",
    ),
    settings: str | None = typer.Option(
        None,
        "--settings",
        help="Path to settings YAML file.",
    ),
    strict: bool = typer.Option(
        False,
        "--strict",
        help="Treat malformed schema text as an error instead of recovering.",
    ),
    reject_unknown: bool = typer.Option(
        False,
        "--reject-unknown",
        help="Reject type names that are neither built in nor registered plugins.",
    ),
    no_dates: bool = typer.Option(
        False,
        "--no-dates",
        help="Do not accept ISO 8601 timestamp strings for Date fields.",
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print the result as JSON.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show detailed output.",
    ),
) -> None:
    """Validate a JSON value against schema text.

    Exits 0 when the value conforms, 1 otherwise.
    """
    config = _load_settings_or_exit(settings)
    config = _apply_overrides(config, strict=strict, reject_unknown=reject_unknown, no_dates=no_dates)
    configure_logging(config.logging)

    schema_text = _read_text_or_exit(schema, "Schema")
    raw_input = _read_text_or_exit(input_path, "Input")
    try:
        value = json.loads(raw_input)
    except json.JSONDecodeError as e:
        typer.echo(f"Error: Invalid JSON in {input_path}: {e}", err=True)
        raise typer.Exit(1) from None

    validator = SchemaTextValidator(config, registry=_build_registry())
    result = validator.validate(schema_text, value)

    if as_json:
        output = result.to_dict()
        output["duration_ms"] = result.duration_ms
        typer.echo(json.dumps(output, indent=2))
    elif result.valid:
        typer.echo("Valid")
    else:
        typer.echo(f"Invalid: {len(result.errors)} error(s)")
        for error in result.errors:
            typer.echo(f"  - {error}")

    if verbose and not as_json:
        typer.echo(f"Duration: {result.duration_ms:.3f} ms")
        typer.echo(f"Settings: {json.dumps(resolve_config(config))}")

    if not result.valid:
        raise typer.Exit(1)


@app.command()
def parse(
    schema: str = typer.Option(
        ...,
        "--schema",
        "-s",
        help="Path to schema text file.",
    ),
    strict: bool = typer.Option(
        False,
        "--strict",
        help="Treat malformed schema text as an error instead of recovering.",
    ),
    reject_unknown: bool = typer.Option(
        False,
        "--reject-unknown",
        help="Reject type names that are neither built in nor registered plugins.",
    ),
) -> None:
    """Parse schema text and print the type tree as JSON."""
    schema_text = _read_text_or_exit(schema, "Schema")
    registry = _build_registry()

    try:
        definition = parse_schema(
            schema_text,
            strict=strict,
            unknown_types=UnknownTypePolicy.REJECT if reject_unknown else UnknownTypePolicy.ACCEPT,
            known_types=registry.names(),
        )
    except SchemaSyntaxError as e:
        typer.echo(f"Schema syntax error: {e}", err=True)
        raise typer.Exit(1) from None
    except RecursionError:
        typer.echo("Schema syntax error: schema is nested too deeply", err=True)
        raise typer.Exit(1) from None

    typer.echo(json.dumps(definition_to_dict(definition), indent=2))


# === Plugin commands ===

plugins_app = typer.Typer(help="Plugin management commands.")
app.add_typer(plugins_app, name="plugins")


@plugins_app.command("list")
def plugins_list() -> None:
    """List available plugins (built-in and installed)."""
    registry = _build_registry()

    typer.echo("\nPLUGINS:")
    if not len(registry):
        typer.echo("  (none available)")
    for plugin in registry.plugins():
        description = plugin.description or "(no description)"
        typer.echo(f"  {plugin.name:18} - {description}")

    typer.echo()  # Final newline


if __name__ == "__main__":
    app()
