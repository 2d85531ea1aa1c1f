"""Node Registry CLI — inspect catalogs and resolve node type versions."""

import logging
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from noderegistry import __version__
from noderegistry.config import RegistryConfig, build_registry, load_config
from noderegistry.errors import RegistryError
from noderegistry.registry.models import Version, VersionSpecifier

console = Console()


@click.group()
@click.version_option(version=__version__)
@click.option("--config", "-c", "config_path", default=None, help="Registry config YAML")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, config_path: str | None, verbose: bool):
    """Node Registry — versioned lookup of node types.

    Node types are loaded from YAML catalog files, either listed in the
    config file or passed on the command line.
    """
    try:
        config = load_config(config_path) if config_path else RegistryConfig()
    except RegistryError as e:
        raise click.ClickException(str(e)) from e

    logging.basicConfig(level=logging.DEBUG if verbose else config.log_level)
    ctx.obj = config


def _registry(config: RegistryConfig, catalogs: tuple[str, ...]):
    config = RegistryConfig(
        allow_duplicates=config.allow_duplicates,
        log_level=config.log_level,
        catalogs=config.catalogs + [Path(c) for c in catalogs],
    )
    if not config.catalogs:
        raise click.UsageError("No catalogs given (pass CATALOG or use --config)")
    return build_registry(config)


def _fail(error: Exception):
    console.print(f"[red]Error:[/] {escape(str(error))}")
    raise SystemExit(1)


# ── List ─────────────────────────────────────────────────────────────


@main.command(name="list")
@click.argument("catalogs", nargs=-1)
@click.pass_obj
def list_types(config: RegistryConfig, catalogs: tuple[str, ...]):
    """List the latest version of every node type."""
    try:
        registry = _registry(config, catalogs)
    except RegistryError as e:
        _fail(e)

    node_types = sorted(registry.list_latest(), key=lambda t: t.identifier)
    if not node_types:
        console.print("[yellow]Registry is empty.[/]")
        return

    table = Table(title=f"Node Types ({len(node_types)})")
    table.add_column("Identifier", style="cyan")
    table.add_column("Version", justify="right")
    table.add_column("Category")
    table.add_column("Description")

    for node_type in node_types:
        table.add_row(
            node_type.identifier,
            str(node_type.version),
            getattr(node_type, "category", ""),
            getattr(node_type, "description", "")[:50],
        )

    console.print(table)


# ── Versions ─────────────────────────────────────────────────────────


@main.command()
@click.argument("identifier")
@click.argument("catalogs", nargs=-1)
@click.pass_obj
def versions(config: RegistryConfig, identifier: str, catalogs: tuple[str, ...]):
    """Show every registered version of IDENTIFIER, newest first."""
    try:
        family = _registry(config, catalogs).versions(identifier)
    except RegistryError as e:
        _fail(e)

    for node_type in family:
        console.print(f"  [cyan]{identifier}[/] {node_type.version}")


# ── Resolve ──────────────────────────────────────────────────────────


@main.command()
@click.argument("identifier")
@click.argument("catalogs", nargs=-1)
@click.option("--version", "version_text", default=None, help="Exact version, e.g. 2.0")
@click.option("--spec", "spec_text", default=None, help="Version specifier, e.g. '>=2.0'")
@click.pass_obj
def resolve(
    config: RegistryConfig,
    identifier: str,
    catalogs: tuple[str, ...],
    version_text: str | None,
    spec_text: str | None,
):
    """Resolve IDENTIFIER to a single node type version."""
    if version_text and spec_text:
        raise click.UsageError("Use either --version or --spec, not both")

    try:
        selector = None
        if version_text:
            selector = Version.parse(version_text)
        elif spec_text:
            selector = VersionSpecifier(spec_text)
        node_type = _registry(config, catalogs).get(identifier, selector)
    except (RegistryError, ValueError) as e:
        _fail(e)

    console.print(f"  [green]Resolved:[/] {node_type.identifier}@{node_type.version}")
    description = getattr(node_type, "description", "")
    if description:
        console.print(f"    {description}")


# ── Specifiers ───────────────────────────────────────────────────────


@main.command(name="check-spec")
@click.argument("specifier")
@click.argument("version")
def check_spec(specifier: str, version: str):
    """Check whether VERSION satisfies SPECIFIER."""
    try:
        matched = VersionSpecifier(specifier).matches(Version.parse(version))
    except (RegistryError, ValueError) as e:
        _fail(e)

    if matched:
        console.print(f"  [green]MATCH[/] {version} satisfies {specifier}")
    else:
        console.print(f"  [yellow]NO MATCH[/] {version} does not satisfy {specifier}")
        raise SystemExit(1)


if __name__ == "__main__":
    main()
