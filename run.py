#!/usr/bin/env python3
"""
Notes API command line.

Usage:
    python run.py --help
    python run.py --action server --reload --verbose
    python run.py --action seed --count 30
    python run.py --action config
"""

import asyncio
import subprocess
import sys
from pathlib import Path

import click
import yaml

PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

from notes_api.core.logging import get_logger, log_with_source, setup_logging

ACTIONS = ("server", "seed", "config", "info")


def validate_project_root() -> Path:
    """Exit unless run.py sits next to the .project_root marker."""
    if not (PROJECT_ROOT / ".project_root").exists():
        click.secho("Error: .project_root not found. Run from project root.", fg="red", err=True)
        sys.exit(1)
    return PROJECT_ROOT


def _log_level(verbose: bool, debug: bool) -> str:
    if debug:
        return "DEBUG"
    return "INFO" if verbose else "WARNING"


@click.command()
@click.option("--action", type=click.Choice(ACTIONS), default="info", help="Action to perform.")
@click.option("--verbose", "-v", is_flag=True, help="INFO level logging.")
@click.option("--debug", "-d", is_flag=True, help="DEBUG level logging.")
@click.option("--host", default=None, help="Bind address (server).")
@click.option("--port", default=None, type=click.IntRange(1, 65535), help="Bind port (server).")
@click.option("--reload", is_flag=True, help="Restart on code changes (server).")
@click.option(
    "--count",
    default=30,
    show_default=True,
    type=click.IntRange(min=1),
    help="Number of random notes to insert (seed).",
)
def main(
    action: str,
    verbose: bool,
    debug: bool,
    host: str | None,
    port: int | None,
    reload: bool,
    count: int,
) -> None:
    """
    Notes API Entry Point.

    Serve the API, fill the database with sample notes, or inspect
    the loaded configuration.

    Examples:

        python run.py --action server --reload --verbose

        python run.py --action seed --count 50
    """
    validate_project_root()

    level = _log_level(verbose, debug)
    setup_logging(level=level, format_type="console")
    logger = get_logger(__name__)
    logger.debug("Starting", extra={"action": action, "log_level": level})

    if action == "server":
        run_server(logger, host, port, reload)
    elif action == "seed":
        run_seed(logger, count)
    elif action == "config":
        show_config(logger)
    else:
        show_info()


def run_server(logger, host: str | None, port: int | None, reload: bool) -> None:
    """Run uvicorn in a child process so --reload can restart it."""
    from notes_api.core.config import get_app_config

    server = get_app_config().application.server
    host = host or server.host
    port = port or server.port

    cmd = [
        sys.executable, "-m", "uvicorn", "notes_api.main:app",
        "--host", host,
        "--port", str(port),
    ]
    if reload:
        cmd.append("--reload")

    log_with_source(logger, "cli", "info", "Starting server", host=host, port=port, reload=reload)
    click.echo(f"Serving notes at http://{host}:{port}/notes/list (Ctrl+C to stop)")

    try:
        subprocess.run(cmd, check=True)
    except KeyboardInterrupt:
        logger.info("Server stopped")
    except subprocess.CalledProcessError as e:
        logger.error("Server exited with an error", extra={"exit_code": e.returncode})
        sys.exit(e.returncode)


async def _seed(count: int) -> int:
    from notes_api.core.database import dispose_engine, get_session_factory, init_models
    from notes_api.seed import seed_notes

    await init_models()
    try:
        async with get_session_factory()() as session:
            created = await seed_notes(session, count=count)
            await session.commit()
    finally:
        await dispose_engine()
    return created


def run_seed(logger, count: int) -> None:
    """Insert random notes and commit them."""
    created = asyncio.run(_seed(count))
    log_with_source(logger, "cli", "info", "Seeding finished", count=created)
    click.secho(f"Created {created} notes", fg="green")


def show_config(logger) -> None:
    """Print the validated configuration as YAML."""
    from notes_api.core.config import get_app_config, get_database_url, get_log_level

    try:
        config = get_app_config()
    except (FileNotFoundError, ValueError) as e:
        logger.error("Failed to load configuration", extra={"error": str(e)})
        click.secho(f"Error loading configuration: {e}", fg="red", err=True)
        sys.exit(1)

    sections = {
        "Application Settings": config.application.model_dump(),
        "Database Settings": {**config.database.model_dump(), "effective_url": get_database_url()},
        "Logging Settings": {**config.logging.model_dump(), "effective_level": get_log_level()},
    }
    for title, values in sections.items():
        click.secho(f"\n{title}:", bold=True)
        click.echo(yaml.safe_dump(values, sort_keys=False, default_flow_style=False).rstrip())


def show_info() -> None:
    """Print name, version and the available actions."""
    from notes_api.core.config import get_app_config

    application = get_app_config().application
    click.echo(f"{application.name} {application.version}")
    click.echo(application.description)
    click.echo()
    click.echo("Available Actions:")
    click.echo("  server   Start the API server")
    click.echo("  seed     Insert random sample notes")
    click.echo("  config   Display configuration")
    click.echo("  info     Show this information")
    click.echo()
    click.echo("Examples:")
    click.echo("  python run.py --action server --reload --verbose")
    click.echo("  python run.py --action seed --count 50")


if __name__ == "__main__":
    main()
