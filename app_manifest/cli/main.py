# app_manifest/cli/main.py
"""Main CLI entry point for app-manifest"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.logging import RichHandler

from ..__version__ import __version__
from ..api.exceptions import ConfigError
from ..api.resolver import ManifestResolver
from ..constants import APP_NAME, LOG_FORMAT
from ..models.config import ResolverConfig
from ..services.config_service import ConfigService

from .utils.output import err_console, format_error

# Import all commands
from .commands import manifest, changes


def setup_logging(verbose: bool = False, debug: bool = False, default_level: str = "WARNING") -> None:
    """Setup logging configuration

    Args:
        verbose: Enable verbose output (INFO level)
        debug: Enable debug output (DEBUG level)
        default_level: Level used when neither flag is given
    """
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.getLevelName(default_level)

    # Configure rich handler on stderr so stdout stays machine readable
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[
            RichHandler(
                console=err_console,
                show_time=debug,
                show_path=debug,
                rich_tracebacks=True,
                tracebacks_suppress=[click]
            )
        ],
        force=True
    )

    # Adjust third-party loggers
    logging.getLogger("git").setLevel(logging.WARNING)


class Context:
    """CLI context object holding configuration and a lazily built resolver"""

    def __init__(self, config: ResolverConfig):
        self.config = config
        self.verbose: bool = False
        self.debug: bool = False
        self._resolver: Optional[ManifestResolver] = None

    @property
    def resolver(self) -> ManifestResolver:
        """Get resolver instance (lazy loading)"""
        if self._resolver is None:
            self._resolver = ManifestResolver(self.config)
        return self._resolver


@click.group(name=APP_NAME)
@click.version_option(__version__, prog_name=APP_NAME)
@click.option('-v', '--verbose', is_flag=True, help='Enable verbose output')
@click.option('-d', '--debug', is_flag=True, help='Enable debug output')
@click.option('-q', '--quiet', is_flag=True, help='Suppress all output except errors')
@click.option('--config', 'config_path', type=click.Path(dir_okay=False, path_type=Path),
              help='Configuration file (default: .app-manifest.yaml)')
@click.option('--descriptor', help='Descriptor file name (default: appspec.yaml)')
@click.pass_context
def cli(ctx, verbose, debug, quiet, config_path, descriptor):
    """App Manifest - resolve deployable applications from a git repository

    An application is a directory holding a descriptor file. Its version is
    the id of its directory tree at the resolved commit.
    """
    try:
        config = ConfigService(config_path).load_config({"descriptor_name": descriptor})
    except ConfigError as e:
        format_error(e)
        sys.exit(1)

    # Setup logging
    if quiet:
        logging.disable(logging.CRITICAL)
    else:
        setup_logging(verbose=verbose, debug=debug, default_level=config.log_level)

    ctx.obj = Context(config)
    ctx.obj.verbose = verbose
    ctx.obj.debug = debug


# Register commands
cli.add_command(manifest.branch)
cli.add_command(manifest.sha)
cli.add_command(manifest.pr)
cli.add_command(changes.changes)


def main():
    """Main entry point for the CLI application

    This function handles:
    - Keyboard interrupts
    - Unexpected exceptions with proper error display
    """
    try:
        cli(prog_name=APP_NAME)

    except KeyboardInterrupt:
        err_console.print("\n[yellow]Operation cancelled by user[/yellow]")
        sys.exit(130)

    except Exception as e:
        err_console.print(f"[red]Unexpected error: {e}[/red]")
        if '--debug' in sys.argv or '-d' in sys.argv:
            err_console.print_exception()
        sys.exit(1)


if __name__ == "__main__":
    main()
