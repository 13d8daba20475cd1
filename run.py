#!/usr/bin/env python3
"""
Application Entry Script.

Main entry point for the admin backend. All functionality is accessible
through command-line options.

Usage:
    python run.py --help
    python run.py --action server --verbose
    python run.py --action config
    python run.py --action purge-logs --days 30
    python run.py --action test --test-type unit
"""

import asyncio
import subprocess
import sys
from pathlib import Path

import click

# Ensure project root is in path for absolute imports
PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

from admin_shell.core.logging import get_logger, setup_logging


def validate_project_root() -> Path:
    """Validate that we're running from the project root."""
    if not (PROJECT_ROOT / ".project_root").exists():
        click.echo(
            click.style("Error: .project_root not found. Run from project root.", fg="red"),
            err=True,
        )
        sys.exit(1)
    return PROJECT_ROOT


@click.command()
@click.option(
    "--action",
    type=click.Choice(["server", "config", "purge-logs", "test", "info"]),
    default="info",
    help="Action to perform.",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable INFO level logging.")
@click.option("--debug", "-d", is_flag=True, help="Enable DEBUG level logging.")
@click.option("--host", default=None, help="Server host (for server action).")
@click.option("--port", default=None, type=int, help="Server port (for server action).")
@click.option("--reload", is_flag=True, help="Enable auto-reload (for server action).")
@click.option(
    "--days",
    default=90,
    type=click.IntRange(min=1),
    help="Retention in days (for purge-logs action).",
)
@click.option(
    "--test-type",
    type=click.Choice(["all", "unit", "integration"]),
    default="all",
    help="Test type to run (for test action).",
)
def main(
    action: str,
    verbose: bool,
    debug: bool,
    host: str | None,
    port: int | None,
    reload: bool,
    days: int,
    test_type: str,
) -> None:
    """
    Admin Backend Entry Point.

    Examples:

        # Start development server
        python run.py --action server --reload --verbose

        # View the merged configuration
        python run.py --action config

        # Delete operation logs older than 30 days
        python run.py --action purge-logs --days 30
    """
    validate_project_root()

    if debug:
        log_level = "DEBUG"
    elif verbose:
        log_level = "INFO"
    else:
        log_level = "WARNING"

    setup_logging(level=log_level, format_type="console")
    logger = get_logger(__name__)

    logger.debug("Starting application", extra={"action": action, "log_level": log_level})

    if action == "server":
        run_server(logger, host, port, reload)
    elif action == "config":
        show_config(logger)
    elif action == "purge-logs":
        purge_logs(logger, days)
    elif action == "test":
        run_tests(logger, test_type)
    elif action == "info":
        show_info(logger)


def run_server(logger, host: str | None, port: int | None, reload: bool) -> None:
    """Start the FastAPI server."""
    from admin_shell.core.config import get_app_config

    server = get_app_config().application.server
    server_host = host or server.host
    server_port = port or server.port

    logger.info(
        "Starting server",
        extra={"host": server_host, "port": server_port, "reload": reload},
    )

    cmd = [
        sys.executable, "-m", "uvicorn",
        "admin_shell.main:app",
        "--host", server_host,
        "--port", str(server_port),
    ]
    if reload:
        cmd.append("--reload")

    click.echo(f"Starting server at http://{server_host}:{server_port}")
    click.echo("Press Ctrl+C to stop\n")

    try:
        subprocess.run(cmd, check=True)
    except KeyboardInterrupt:
        logger.info("Server stopped")
    except subprocess.CalledProcessError as e:
        logger.error("Server failed to start", extra={"exit_code": e.returncode})
        sys.exit(e.returncode)


def _echo_section(title: str, values: dict, indent: int = 2) -> None:
    click.echo(f"\n{title}")
    click.echo("-" * 40)
    _echo_values(values, indent)


def _echo_values(values: dict, indent: int) -> None:
    pad = " " * indent
    for key, value in values.items():
        if isinstance(value, dict):
            click.echo(f"{pad}{key}:")
            _echo_values(value, indent + 2)
        elif "password" in key or key == "secret":
            click.echo(f"{pad}{key}: ****")
        else:
            click.echo(f"{pad}{key}: {value}")


def show_config(logger) -> None:
    """Display the merged configuration with secrets masked."""
    from admin_shell.core.config import compose_config, get_app_config, get_settings

    try:
        merged = compose_config(get_settings(), get_app_config())
    except Exception as e:
        logger.error("Failed to load configuration", extra={"error": str(e)})
        click.echo(click.style(f"Error loading configuration: {e}", fg="red"))
        sys.exit(1)

    click.echo("Application Configuration:")
    scalars = {k: v for k, v in merged.items() if not isinstance(v, dict)}
    for key, value in merged.items():
        if isinstance(value, dict):
            _echo_section(key, value)
    _echo_section("paths and flags", scalars)

    logger.info("Configuration displayed successfully")


def purge_logs(logger, days: int) -> None:
    """Run the operation log retention task in-process."""
    from admin_shell.core.database import dispose_engine
    from admin_shell.tasks.maintenance import clean_operation_logs

    async def _run() -> dict:
        try:
            return await clean_operation_logs(days=days)
        finally:
            await dispose_engine()

    result = asyncio.run(_run())
    logger.info("Operation log purge finished", extra=result)
    click.echo(f"Deleted {result['deleted']} operation log rows older than {days} days")


def run_tests(logger, test_type: str) -> None:
    """Run the test suite."""
    logger.info("Running tests", extra={"type": test_type})

    cmd = [sys.executable, "-m", "pytest"]
    if test_type == "unit":
        cmd.append("tests/unit")
    elif test_type == "integration":
        cmd.append("tests/integration")
    else:
        cmd.append("tests/")
    cmd.append("-v")

    click.echo(f"Running: {' '.join(cmd)}\n")

    try:
        result = subprocess.run(cmd)
        sys.exit(result.returncode)
    except FileNotFoundError:
        logger.error("pytest not found. Install with: pip install -e '.[test]'")
        sys.exit(1)


def show_info(logger) -> None:
    """Display application information."""
    from admin_shell.core.config import get_app_config

    application = get_app_config().application
    click.echo(application.name)
    click.echo("=" * 40)
    click.echo(f"Version: {application.version}")
    click.echo(f"Description: {application.description}")
    click.echo()
    click.echo("Available Actions:")
    click.echo("  --action server      Start the server")
    click.echo("  --action config      Display the merged configuration")
    click.echo("  --action purge-logs  Delete old operation logs")
    click.echo("  --action test        Run test suite")
    click.echo("  --action info        Show this information")

    logger.debug("Info displayed")


if __name__ == "__main__":
    main()
