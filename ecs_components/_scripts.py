"""Runnable scripts for common dev tasks. Use: uv run <script-name>."""

import os
import subprocess
import sys


def _run(args: list[str], env: dict[str, str] | None = None) -> None:
    """Run a command; exit with its code."""
    full_env = os.environ.copy()
    if env:
        full_env.update(env)
    sys.exit(subprocess.run(args, env=full_env).returncode)


def lint() -> None:
    """Run ruff check on ecs_components and tests."""
    _run([sys.executable, "-m", "ruff", "check", "ecs_components", "tests"])


def lint_fix() -> None:
    """Run ruff check --fix on ecs_components and tests."""
    _run([sys.executable, "-m", "ruff", "check", "--fix", "ecs_components", "tests"])


def format() -> None:
    """Run ruff format on ecs_components and tests."""
    _run([sys.executable, "-m", "ruff", "format", "ecs_components", "tests"])


def type_check() -> None:
    """Run pyright on ecs_components."""
    _run([sys.executable, "-m", "pyright", "ecs_components"])


def test() -> None:
    """Run the unit tests."""
    _run([sys.executable, "-m", "pytest", "tests/", "-v", "-m", "not integration"])


def test_cov() -> None:
    """Run the unit tests with coverage report."""
    _run(
        [
            sys.executable,
            "-m",
            "pytest",
            "tests/",
            "-m",
            "not integration",
            "--cov=ecs_components",
            "--cov-report=term-missing",
            "-v",
        ]
    )


def test_integration() -> None:
    """Run the live-cloud integration tests (creates and destroys real resources)."""
    _run(
        [sys.executable, "-m", "pytest", "tests/integration/", "-v", "-m", "integration"],
        env={"ECS_COMPONENTS_INTEGRATION": "1"},
    )
