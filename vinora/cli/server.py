"""Vinora server control script.

Usage:
    vinora-server start [--host HOST] [--port PORT] [--reload] [--foreground]
    vinora-server stop
    vinora-server restart [--host HOST] [--port PORT]
    vinora-server status [--port PORT]

The PID and log files live in the configured data directory, next to the
wine and transaction snapshots.
"""

import argparse
import json
import os
import signal
import subprocess
import sys
import time
import urllib.request
from pathlib import Path

from vinora.config import settings

PID_FILE_NAME = "vinora.pid"
LOG_FILE_NAME = "vinora.log"
STARTUP_TIMEOUT = 10.0
SHUTDOWN_TIMEOUT = 5.0


def pid_file() -> Path:
    return settings.data_dir / PID_FILE_NAME


def log_file() -> Path:
    return settings.data_dir / LOG_FILE_NAME


def get_pid() -> int | None:
    """Return the PID recorded for a live server, clearing a stale PID file."""
    path = pid_file()
    if not path.exists():
        return None

    try:
        pid = int(path.read_text().strip())
        os.kill(pid, 0)
        return pid
    except (ValueError, ProcessLookupError, PermissionError):
        path.unlink(missing_ok=True)
        return None


def fetch_health(port: int, timeout: float = 2.0) -> dict | None:
    """Query the /health endpoint, or return None when it does not answer."""
    try:
        with urllib.request.urlopen(f"http://localhost:{port}/health", timeout=timeout) as response:
            return json.loads(response.read().decode())
    except (OSError, ValueError):
        return None


def _uvicorn_command(host: str, port: int, reload: bool) -> list[str]:
    cmd = [sys.executable, "-m", "uvicorn", "vinora.main:app", "--host", host, "--port", str(port)]
    if reload:
        cmd.append("--reload")
    return cmd


def _wait_until_healthy(process: subprocess.Popen, port: int) -> bool:
    """Poll until the ledger is loaded and /health answers, or the process dies."""
    deadline = time.monotonic() + STARTUP_TIMEOUT
    while time.monotonic() < deadline:
        if process.poll() is not None:
            return False
        if fetch_health(port, timeout=0.5) is not None:
            return True
        time.sleep(0.25)
    return process.poll() is None


def _wait_for_exit(pid: int, timeout: float) -> bool:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        try:
            os.kill(pid, 0)
        except ProcessLookupError:
            return True
        time.sleep(0.25)
    return False


def start_server(port: int | None = None, host: str | None = None,
                 reload: bool = False, foreground: bool = False) -> bool:
    """Start uvicorn serving the Vinora API.

    In the background the server's output goes to the log file and the call
    returns once the health endpoint answers.

    Returns:
        True if the server started
    """
    port = port or settings.port
    host = host or settings.host
    pid = get_pid()
    if pid:
        print(f"Server is already running (PID: {pid})")
        return False

    settings.data_dir.mkdir(parents=True, exist_ok=True)
    cmd = _uvicorn_command(host, port, reload)
    print(f"Starting Vinora server on http://{host}:{port} (data: {settings.data_dir})")

    if foreground:
        print("Press Ctrl+C to stop the server")
        try:
            subprocess.run(cmd)
        except KeyboardInterrupt:
            print("\nServer stopped")
        return True

    with open(log_file(), "w") as log:
        process = subprocess.Popen(
            cmd,
            stdout=log,
            stderr=subprocess.STDOUT,
            start_new_session=True,
        )

    if not _wait_until_healthy(process, port):
        print(f"Failed to start server. Check {log_file()} for details.")
        return False

    pid_file().write_text(str(process.pid))
    print(f"Server started with PID: {process.pid}")
    print(f"Logs available at: {log_file()}")
    return True


def stop_server() -> bool:
    """Stop the background server.

    SIGTERM lets the lifespan write the final snapshot; SIGKILL is only sent
    if the process outlives the shutdown timeout.

    Returns:
        True if a server was stopped
    """
    pid = get_pid()
    if not pid:
        print("Server is not running")
        return False

    print(f"Stopping server (PID: {pid})...")
    try:
        os.kill(pid, signal.SIGTERM)
        if not _wait_for_exit(pid, SHUTDOWN_TIMEOUT):
            print("Server didn't stop gracefully, forcing...")
            os.kill(pid, signal.SIGKILL)
    except ProcessLookupError:
        pass
    except PermissionError:
        print(f"Permission denied to stop process {pid}")
        return False

    pid_file().unlink(missing_ok=True)
    print("Server stopped")
    return True


def restart_server(port: int | None = None, host: str | None = None) -> bool:
    print("Restarting Vinora server...")
    stop_server()
    return start_server(port=port, host=host)


def server_status(port: int | None = None) -> bool:
    """Print whether the server runs and what its health endpoint reports.

    Returns:
        True if the server is running
    """
    port = port or settings.port
    pid = get_pid()
    if not pid:
        print("Vinora server is not running")
        return False

    print(f"Vinora server is running (PID: {pid})")
    health = fetch_health(port)
    if health is None:
        print("  (Could not fetch health status)")
        return True

    print(f"  Status:  {health.get('status', 'unknown')}")
    print(f"  Version: {health.get('version', 'unknown')}")
    print(f"  Wines:   {health.get('wines', 'unknown')}")
    return True


def _add_bind_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--port", "-p",
        type=int,
        help="Port to bind to (default: server.port from config)",
    )
    parser.add_argument(
        "--host",
        help="Host to bind to (default: server.host from config)",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vinora-server",
        description="Start, stop and inspect the Vinora API server",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    start_parser = subparsers.add_parser("start", help="Start the server")
    _add_bind_arguments(start_parser)
    start_parser.add_argument("--reload", "-r", action="store_true", help="Reload on code changes")
    start_parser.add_argument("--foreground", "-f", action="store_true", help="Run in the foreground")

    subparsers.add_parser("stop", help="Stop the server")

    restart_parser = subparsers.add_parser("restart", help="Restart the server")
    _add_bind_arguments(restart_parser)

    status_parser = subparsers.add_parser("status", help="Show server status")
    status_parser.add_argument("--port", "-p", type=int, help="Port to query (default: server.port from config)")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    try:
        if args.command == "start":
            ok = start_server(args.port, args.host, args.reload, args.foreground)
        elif args.command == "stop":
            ok = stop_server()
        elif args.command == "restart":
            ok = restart_server(args.port, args.host)
        else:
            server_status(args.port)
            ok = True
    except KeyboardInterrupt:
        print("\nInterrupted")
        return 130

    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
