#!/usr/bin/env python3
"""
Todo Tracker launcher.

    python run.py --action server --reload -v
    python run.py --action config
    python run.py --action test --test-type integration --coverage
"""

import subprocess
import sys
from pathlib import Path

import click

PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

from todo_tracker.core.config import validate_project_root
from todo_tracker.core.logging import get_logger, setup_logging

TEST_PATHS = {
    "all": "tests/",
    "unit": "tests/unit",
    "integration": "tests/integration",
}


def _log_level(verbose: bool, debug: bool) -> str:
    if debug:
        return "DEBUG"
    return "INFO" if verbose else "WARNING"


@click.command()
@click.option(
    "--action",
    type=click.Choice(["server", "config", "test", "info"]),
    default="info",
    show_default=True,
)
@click.option("--verbose", "-v", is_flag=True, help="Log at INFO.")
@click.option("--debug", "-d", is_flag=True, help="Log at DEBUG.")
@click.option("--host", default=None, help="Override server.host from application.yaml.")
@click.option("--port", default=None, type=int, help="Override server.port from application.yaml.")
@click.option("--reload", is_flag=True, help="Restart uvicorn on code changes.")
@click.option(
    "--test-type",
    type=click.Choice(sorted(TEST_PATHS)),
    default="all",
    show_default=True,
)
@click.option("--coverage", is_flag=True, help="Report coverage of todo_tracker.")
def main(
    action: str,
    verbose: bool,
    debug: bool,
    host: str | None,
    port: int | None,
    reload: bool,
    test_type: str,
    coverage: bool,
) -> None:
    """Serve the Todo Tracker API, inspect its configuration or run its tests."""
    validate_project_root()
    setup_logging(
        level=_log_level(verbose, debug),
        format_type="console",
        enable_file_logging=False,
    )
    logger = get_logger(__name__)

    if action == "server":
        serve(logger, host, port, reload)
    elif action == "config":
        print_config()
    elif action == "test":
        run_tests(logger, test_type, coverage)
    else:
        print_info()


def serve(logger, host: str | None, port: int | None, reload: bool) -> None:
    """Run uvicorn against todo_tracker.main:app."""
    from todo_tracker.core.config import get_server_address

    default_host, default_port = get_server_address()
    host = host or default_host
    port = port or default_port

    cmd = [
        sys.executable, "-m", "uvicorn", "todo_tracker.main:app",
        "--host", host,
        "--port", str(port),
    ]
    if reload:
        cmd.append("--reload")

    logger.info("Launching uvicorn", extra={"host": host, "port": port, "reload": reload})
    click.echo(f"Serving on http://{host}:{port} (Ctrl+C to stop)")

    try:
        subprocess.run(cmd, check=True)
    except KeyboardInterrupt:
        logger.info("Server stopped")
    except subprocess.CalledProcessError as e:
        logger.error("uvicorn exited with an error", extra={"exit_code": e.returncode})
        sys.exit(e.returncode)


def _echo_tree(values: dict, depth: int = 1) -> None:
    pad = "  " * depth
    for key, value in values.items():
        if isinstance(value, dict):
            click.echo(f"{pad}{key}:")
            _echo_tree(value, depth + 1)
        else:
            click.echo(f"{pad}{key}: {value}")


def print_config() -> None:
    """Print every validated YAML section, plus the resolved database URL for SQLite."""
    from todo_tracker.core.config import get_app_config, get_database_url

    try:
        app_config = get_app_config()
    except (ValueError, FileNotFoundError) as e:
        click.echo(click.style(f"Invalid configuration: {e}", fg="red"), err=True)
        sys.exit(1)

    for section, values in app_config.as_dict().items():
        click.echo(click.style(f"{section}.yaml", bold=True))
        _echo_tree(values)

    if app_config.database.is_sqlite:
        click.echo(click.style("resolved", bold=True))
        _echo_tree({"database_url": get_database_url()})


def run_tests(logger, test_type: str, coverage: bool) -> None:
    """Run pytest on the selected suite and exit with its status."""
    cmd = [sys.executable, "-m", "pytest", TEST_PATHS[test_type], "-v"]
    if coverage:
        cmd += ["--cov=todo_tracker", "--cov-report=term-missing"]

    logger.info("Running tests", extra={"suite": test_type, "coverage": coverage})
    click.echo(" ".join(cmd))
    sys.exit(subprocess.run(cmd).returncode)


def print_info() -> None:
    from todo_tracker.core.config import get_app_config

    application = get_app_config().application
    click.echo(f"{application.name} {application.version}")
    click.echo(application.description)
    click.echo()
    click.echo("Actions: server, config, test, info (default). See --help.")


if __name__ == "__main__":
    main()
