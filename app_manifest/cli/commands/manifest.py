"""Manifest resolution commands"""

import sys

import click

from ...api.exceptions import ManifestToolError
from ...constants import OutputFormat
from ..utils.output import FORMAT_CHOICES, err_console, format_error, format_manifest

format_option = click.option(
    '--format', 'output_format',
    type=click.Choice(FORMAT_CHOICES),
    default=OutputFormat.TABLE.value,
    show_default=True,
    help='Output format'
)


def _run(ctx, resolve) -> None:
    """Resolve a manifest and report failures with their error code"""
    try:
        manifest = resolve(ctx.obj.resolver)
    except ManifestToolError as e:
        format_error(e)
        if ctx.obj.debug:
            err_console.print_exception()
        sys.exit(1)

    format_manifest(manifest, ctx.params['output_format'])


@click.command()
@click.argument('repository', type=click.Path(file_okay=False))
@click.argument('branch_name', metavar='BRANCH')
@format_option
@click.pass_context
def branch(ctx, repository, branch_name, output_format):
    """Show the applications at a branch

    Examples:
        # Applications on main
        app-manifest branch ./repo main

        # As JSON
        app-manifest branch ./repo main --format json
    """
    _run(ctx, lambda resolver: resolver.manifest_by_branch(repository, branch_name))


@click.command()
@click.argument('repository', type=click.Path(file_okay=False))
@click.argument('commit_sha', metavar='SHA')
@format_option
@click.pass_context
def sha(ctx, repository, commit_sha, output_format):
    """Show the applications at a commit

    Arguments:
        SHA: Full hex commit id

    Examples:
        app-manifest sha ./repo 3f1c2a...
    """
    _run(ctx, lambda resolver: resolver.manifest_by_sha(repository, commit_sha))


@click.command()
@click.argument('repository', type=click.Path(file_okay=False))
@click.argument('from_branch', metavar='FROM')
@click.argument('to_branch', metavar='TO')
@format_option
@click.pass_context
def pr(ctx, repository, from_branch, to_branch, output_format):
    """Show the applications changed on FROM relative to TO

    Examples:
        # Applications touched by a feature branch
        app-manifest pr ./repo feature main
    """
    _run(ctx, lambda resolver: resolver.manifest_by_pr(repository, from_branch, to_branch))
