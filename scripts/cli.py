"""CLI helper for running the Phoenix console locally."""

from __future__ import annotations

import argparse
import json
import subprocess
import sys
from pathlib import Path


def find_repo_root() -> Path:
    """Locate the repository root for running uv-managed commands."""
    current = Path(__file__).resolve()
    git_root: Path | None = None
    for parent in current.parents:
        if (parent / "pyproject.toml").exists():
            return parent
        if git_root is None and (parent / ".git").exists():
            git_root = parent
    if git_root is not None:
        return git_root
    return current.parents[1]


ROOT = find_repo_root()


def run_command(command: list[str]) -> int:
    """Execute the provided command within the repo root."""
    return subprocess.run(command, cwd=ROOT).returncode


def print_health() -> int:
    """Print the aggregated agent health as JSON; non-zero unless all healthy."""
    sys.path.insert(0, str(ROOT))
    from phoenix_console.api.facade import HRPhoenixApi
    from phoenix_console.logging_config import configure_logging

    configure_logging()
    report = HRPhoenixApi().check_all_services_health()
    print(json.dumps(report.as_dict(), indent=2))
    return 0 if report.overall.value == "healthy" else 1


def main() -> None:
    """Parse CLI args and dispatch the requested workflow."""
    parser = argparse.ArgumentParser(
        description="Run phoenix-console workflows via uv-managed commands."
    )
    parser.add_argument(
        "target",
        choices=["ui", "test", "health"],
        help="Component to exercise (UI, test suite, or a one-off agent health check).",
    )
    parser.add_argument(
        "--port",
        type=int,
        help="Override the default ui port (8501).",
    )
    parser.add_argument(
        "--extra",
        nargs=argparse.REMAINDER,
        help="Additional arguments appended to the invoked command.",
    )

    args = parser.parse_args()
    extra = args.extra or []

    if args.target == "health":
        code = print_health()
        if code != 0:
            sys.exit(code)
        return

    if args.target == "ui":
        port = args.port or 8501
        command = [
            "uv",
            "run",
            "python",
            "-m",
            "streamlit",
            "run",
            "phoenix_console/ui/app.py",
            "--server.port",
            str(port),
            "--server.address",
            "0.0.0.0",
            "--server.headless",
            "true",
        ]
    else:  # args.target == "test"
        command = ["uv", "run", "pytest"]

    command.extend(extra)
    code = run_command(command)
    if code != 0:
        sys.exit(code)


if __name__ == "__main__":
    main()
