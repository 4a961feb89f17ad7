"""Invoke tasks for Vinora application management."""

import sys
from pathlib import Path

from invoke import task
from invoke.context import Context

DATA_DIR = Path("data")
SNAPSHOT_FILES = (DATA_DIR / "wines.json", DATA_DIR / "transactions.json")


def _bind_options(host: str, port: int) -> str:
    options = ""
    if host:
        options += f" --host {host}"
    if port:
        options += f" --port {port}"
    return options


@task
def start(ctx: Context, host: str = "", port: int = 0, reload: bool = False) -> None:
    """Start the Vinora FastAPI server.

    Args:
        ctx: Invoke context
        host: Host to bind to (default: server.host from config)
        port: Port to bind to (default: server.port from config)
        reload: Enable auto-reload for development
    """
    cmd = f"uv run vinora-server start{_bind_options(host, port)} --foreground"
    if reload:
        cmd += " --reload"

    try:
        ctx.run(cmd, pty=True)
    except KeyboardInterrupt:
        print("\nServer stopped")
        sys.exit(0)


@task(name="start-background")
def start_background(ctx: Context, host: str = "", port: int = 0) -> None:
    """Start the Vinora FastAPI server in the background."""
    ctx.run(f"uv run vinora-server start{_bind_options(host, port)}")


@task
def stop(ctx: Context) -> None:
    """Stop the Vinora FastAPI server."""
    ctx.run("uv run vinora-server stop")


@task
def restart(ctx: Context, host: str = "", port: int = 0) -> None:
    """Restart the Vinora FastAPI server."""
    ctx.run(f"uv run vinora-server restart{_bind_options(host, port)}")


@task
def status(ctx: Context) -> None:
    """Check the status of the Vinora server."""
    ctx.run("uv run vinora-server status")


@task
def logs(ctx: Context, follow: bool = False, lines: int = 50) -> None:
    """View the Vinora server logs.

    Args:
        ctx: Invoke context
        follow: Follow log output (like tail -f)
        lines: Number of lines to show (default: 50)
    """
    log_file = DATA_DIR / "vinora.log"
    if not log_file.exists():
        print("No log file found. Server may not have been started in background mode.")
        return

    if follow:
        ctx.run(f"tail -f {log_file}", pty=True)
    else:
        ctx.run(f"tail -n {lines} {log_file}")


@task
def test(ctx: Context, verbose: bool = False, coverage: bool = False) -> None:
    """Run the test suite.

    Args:
        ctx: Invoke context
        verbose: Enable verbose output
        coverage: Run with coverage report
    """
    cmd = "uv run pytest"
    if verbose:
        cmd += " -v"
    if coverage:
        cmd += " --cov=vinora --cov-report=term-missing"
    ctx.run(cmd, pty=True)


@task
def clean(ctx: Context) -> None:
    """Clean up caches and build artifacts."""
    for pattern in ["__pycache__", "*.pyc", "*.pyo", ".pytest_cache"]:
        ctx.run(f"find . -name '{pattern}' -exec rm -rf {{}} + 2>/dev/null || true", warn=True)

    for path in ["build", "dist", "*.egg-info", ".eggs"]:
        ctx.run(f"rm -rf {path} 2>/dev/null || true", warn=True)

    print("Cleanup complete")


@task
def purge(ctx: Context, force: bool = False) -> None:
    """Delete the wine and transaction snapshots. Stops the server if running.

    The next start reloads the seed collection.

    Args:
        ctx: Invoke context
        force: Skip confirmation prompt
    """
    import time

    existing = [path for path in SNAPSHOT_FILES if path.exists()]
    if not existing:
        print("Nothing to purge. No snapshot files found.")
        return

    if not force:
        print("The following will be deleted:")
        for path in existing:
            print(f"  - {path}")
        response = input("\nAre you sure you want to purge? [y/N]: ").strip().lower()
        if response not in ("y", "yes"):
            print("Purge cancelled.")
            return

    # The server writes a final snapshot on shutdown, so stop it first
    print("Stopping server if running...")
    ctx.run("uv run vinora-server stop", warn=True)
    time.sleep(1)

    for path in existing:
        path.unlink(missing_ok=True)
        print(f"Deleted: {path}")

    print("\nPurge complete.")
    print("\nNote: Run 'invoke start' to restart the server.")
