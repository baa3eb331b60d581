"""Changed files command"""

import sys

import click

from ...api.exceptions import ManifestToolError
from ...constants import DEFAULT_REVISION, OutputFormat
from ..utils.output import FORMAT_CHOICES, format_error, format_paths


@click.command()
@click.argument('repository', type=click.Path(file_okay=False))
@click.argument('revision', default=DEFAULT_REVISION)
@click.option('--format', 'output_format', type=click.Choice(FORMAT_CHOICES),
              default=OutputFormat.TABLE.value, help='Output format')
@click.pass_context
def changes(ctx, repository, revision, output_format):
    """List files changed by a commit

    Compares REVISION (default HEAD) with its first parent.
    """
    try:
        paths = ctx.obj.resolver.resolve_changes(repository, revision)
    except ManifestToolError as e:
        format_error(e)
        sys.exit(1)

    format_paths(paths, output_format)
