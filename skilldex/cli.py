"""CLI interface for skilldex."""

from __future__ import annotations

import click
from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel
from rich.table import Table

from skilldex import __version__

console = Console()

config_option = click.option(
    "--config", "-c", default="skilldex.yaml", help="Config file path"
)
root_option = click.option(
    "--root", "-r", default=None, help="Skill tree root (overrides config)"
)


def _open_registry(config: str, root: str | None):
    """Load config, set up logging and build a READY registry or exit."""
    from skilldex.config import load_config
    from skilldex.errors import RegistryInitError
    from skilldex.registry import SkillRegistry
    from skilldex.utils import setup_logging

    cfg = load_config(config)
    setup_logging(cfg.logging.level, cfg.logging.format)

    try:
        return SkillRegistry.from_config(cfg, root=root)
    except RegistryInitError as e:
        console.print(f"[red]Error: {e}[/]")
        raise SystemExit(1)


@click.group()
@click.version_option(version=__version__, prog_name="skilldex")
def cli():
    """skilldex - find the right skill document for a task."""
    pass


@cli.command()
def init():
    """Generate default skilldex.yaml."""
    import os

    from skilldex.config import DEFAULT_CONFIG_PATH, generate_default_config

    if os.path.exists(DEFAULT_CONFIG_PATH):
        if not click.confirm(f"{DEFAULT_CONFIG_PATH} already exists. Overwrite?"):
            console.print("[yellow]Cancelled.[/]")
            return

    with open(DEFAULT_CONFIG_PATH, "w", encoding="utf-8") as f:
        f.write(generate_default_config())

    console.print(f"[green]Created {DEFAULT_CONFIG_PATH}[/]")
    console.print("Edit the file to point [bold]skills.root[/] at your skill tree.")


@cli.command("list")
@config_option
@root_option
@click.option("--domain", "-d", default=None, help="Only show skills in this domain")
def list_skills(config: str, root: str | None, domain: str | None):
    """List all loaded skills."""
    from skilldex.utils import truncate_string

    registry = _open_registry(config, root)

    docs = sorted(registry.list_documents(), key=lambda d: d.name)
    if domain:
        docs = [d for d in docs if d.domain == domain.lower()]

    if not docs:
        console.print("[yellow]No skills found.[/]")
        return

    table = Table(title=f"Skills ({len(docs)})")
    table.add_column("Name", style="bold")
    table.add_column("Domain")
    table.add_column("Tags")
    table.add_column("Description")

    for doc in docs:
        table.add_row(
            doc.name,
            doc.domain,
            ", ".join(doc.tags),
            truncate_string(doc.description, 80),
        )

    console.print(table)


@cli.command()
@config_option
@root_option
@click.argument("query", nargs=-1, required=True)
@click.option("--limit", "-n", type=int, default=None, help="Maximum results")
def find(config: str, root: str | None, query: tuple[str, ...], limit: int | None):
    """Rank skills against a task description."""
    registry = _open_registry(config, root)
    text = " ".join(query)

    matches = registry.find(text, limit=limit)
    if not matches:
        console.print(f"[yellow]No skills match '{text}'.[/]")
        return

    table = Table(title=f"Matches for '{text}'")
    table.add_column("#", justify="right")
    table.add_column("Name", style="bold")
    table.add_column("Score", justify="right")
    table.add_column("Matched")

    for i, match in enumerate(matches, 1):
        matched = [f"[cyan]{t}[/]" for t in match.matched_tags] + match.matched_terms
        table.add_row(str(i), match.name, str(match.score), ", ".join(matched))

    console.print(table)


@cli.command()
@config_option
@root_option
@click.argument("name")
@click.option("--raw", is_flag=True, help="Print the body without Markdown rendering")
def show(config: str, root: str | None, name: str, raw: bool):
    """Show a skill's metadata and content."""
    from skilldex.errors import NotFound

    registry = _open_registry(config, root)

    try:
        doc = registry.get_by_name(name)
    except NotFound as e:
        console.print(f"[red]Error: {e}[/]")
        raise SystemExit(1)

    if raw:
        click.echo(doc.body)
        return

    console.print(Panel.fit(
        f"[bold green]{doc.name}[/]\n"
        f"Domain: {doc.domain}\n"
        f"Tags: {', '.join(doc.tags)}\n"
        f"Source: {doc.source}\n"
        f"Checksum: {doc.checksum[:12]}\n\n"
        f"{doc.description}"
    ))

    if doc.references:
        table = Table(title="References")
        table.add_column("Name")
        table.add_column("Kind")
        table.add_column("Locator")
        for ref in doc.references:
            table.add_row(ref.name, ref.kind.value, ref.locator)
        console.print(table)

    console.print(Markdown(doc.body))


@cli.command()
@config_option
@root_option
def check(config: str, root: str | None):
    """Load the skill tree and report problems."""
    registry = _open_registry(config, root)
    store = registry.store

    console.print(f"[green]✓ {len(store)} skill(s) loaded from {registry.root}[/]")
    if store.ignored:
        console.print(f"[dim]{len(store.ignored)} file(s) without front-matter ignored[/]")

    for warning in store.warnings:
        console.print(f"[yellow]⚠ {warning}[/]")

    if store.skipped:
        table = Table(title="Skipped files")
        table.add_column("File")
        table.add_column("Reason")
        for path, reason in store.skipped.items():
            table.add_row(path, reason)
        console.print(table)
        raise SystemExit(1)


if __name__ == "__main__":
    cli()
