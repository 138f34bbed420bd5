import logging
import sys
from pathlib import Path

import rich_click as click
from rich.console import Console
from rich.traceback import install

from countersync import __version__, log
from countersync.connectors.appsync_explorer import AppSyncExplorer
from countersync.datafetch.signing import DEFAULT_SIGNING_SERVICE
from countersync.errors import CounterSyncError
from countersync.introspection.introspection import COUNTERSYNC_HOME
from countersync.ui.prompts import Prompter


@click.command(context_settings={"auto_envvar_prefix": "COUNTERSYNC"})
@click.argument("url")
@click.option(
    "--interactive",
    type=str,
    help="The URL to scan for an AppSync GraphQL endpoint.",
)
@click.option(
    "--cache-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=COUNTERSYNC_HOME,
    help="Directory where introspection responses are cached",
    show_default=True,
)
@click.option(
    "--timeout",
    type=click.IntRange(min=1),
    default=30,
    help="HTTP timeout in seconds",
    show_default=True,
)
@click.option(
    "--signing-service",
    type=str,
    default=DEFAULT_SIGNING_SERVICE,
    help="AWS service name used when signing requests with IAM credentials",
    show_default=True,
)
@click.option(
    "-l",
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    default="INFO",
    help="Log level",
    show_default=True,
)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, writable=True, path_type=Path),
    help="Log file",
)
@click.version_option(__version__)
def cli(
    url: str,
    interactive: str | None,
    cache_dir: Path,
    timeout: int,
    signing_service: str,
    log_level: str,
    log_file: Path | None,
) -> None:
    """Scan URL for an AppSync GraphQL endpoint and browse its schema."""
    file_handler = None
    if log_file:
        file_handler = logging.FileHandler(log_file, mode="w")
        file_handler.setFormatter(logging.Formatter("%(asctime)s:%(levelname)s:%(message)s"))
        log.addHandler(file_handler)

    log.setLevel(log_level.upper())
    if log_level.upper() == "DEBUG":
        _ = install(show_locals=True)

    console = Console()
    explorer = AppSyncExplorer(
        Prompter(console),
        console=console,
        cache_dir=cache_dir,
        timeout=timeout,
        signing_service=signing_service,
    )
    try:
        browsed = explorer.explore(url)
    except CounterSyncError as e:
        log.error(f"[!] {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        log.info("Interrupted, exiting.")
        return
    finally:
        if file_handler is not None:
            log.removeHandler(file_handler)
            file_handler.close()

    if not browsed:
        sys.exit(1)


def main():
    cli()


if __name__ == "__main__":
    main()
