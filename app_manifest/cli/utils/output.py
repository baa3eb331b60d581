# app_manifest/cli/utils/output.py
"""Output formatting utilities"""

import json
from typing import List

import click
import yaml
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ...api.exceptions import ManifestToolError
from ...constants import EMOJI_ERROR, OutputFormat
from ...models.manifest import Manifest

console = Console()
err_console = Console(stderr=True)

FORMAT_CHOICES = [f.value for f in OutputFormat]


def format_manifest(manifest: Manifest, output_format: str = OutputFormat.TABLE.value) -> None:
    """Format and display a manifest"""
    if output_format == OutputFormat.JSON.value:
        click.echo(json.dumps(manifest.to_dict(), indent=2, ensure_ascii=False, default=str))
        return

    if output_format == OutputFormat.YAML.value:
        click.echo(yaml.safe_dump(manifest.to_dict(), default_flow_style=False, sort_keys=False), nl=False)
        return

    table = Table(title=f"Applications at {manifest.sha[:12]}", box=box.ROUNDED)
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Path", style="green")
    table.add_column("Version", style="dim")

    for app in manifest.applications:
        table.add_row(app.name, app.path, app.version)

    if manifest.applications:
        console.print(table)
    else:
        console.print("[yellow]No applications found[/yellow]")

    console.print(f"[dim]Repository: {manifest.dir}  Commit: {manifest.sha}[/dim]")


def format_paths(paths: List[str], output_format: str = OutputFormat.TABLE.value) -> None:
    """Format and display a list of file paths"""
    if output_format == OutputFormat.JSON.value:
        click.echo(json.dumps(paths, indent=2))
    elif output_format == OutputFormat.YAML.value:
        click.echo(yaml.safe_dump(paths, default_flow_style=False), nl=False)
    else:
        for path in paths:
            click.echo(path)


def format_error(error: ManifestToolError) -> None:
    """Display a manifest tool error with its code"""
    code = f" [{error.error_code}]" if error.error_code else ""
    err_console.print(f"[red]{EMOJI_ERROR} {escape(str(error) + code)}[/red]", highlight=False)
