"""Developer tasks for inbox-autopilot, run through uv.

Usage: python scripts/tasks.py [lint|typecheck|test|examples|ci]
"""

from __future__ import annotations

import argparse
import subprocess
from collections.abc import Callable, Sequence

EXAMPLE_CONFIG = "examples/config.yaml"
EXAMPLE_MESSAGE = "examples/message.yaml"


def uv_run(*cmd: str) -> int:
    print("$ uv run", " ".join(cmd))
    return subprocess.run(["uv", "run", *cmd]).returncode


tasks: dict[str, Callable[[], int]] = {}


def task(fn: Callable[[], int]) -> Callable[[], int]:
    tasks[fn.__name__] = fn
    return fn


@task
def lint() -> int:
    """ruff plus black in check mode."""
    return uv_run("ruff", "check", ".") or uv_run("black", "--check", ".")


@task
def typecheck() -> int:
    return uv_run("mypy")


@task
def test() -> int:
    return uv_run("pytest", "-q", "--cov=src/inbox_autopilot", "--cov-report=term-missing")


@task
def examples() -> int:
    """Validate the example config and evaluate the example message with it."""
    return uv_run("inbox-autopilot", "validate", "-c", EXAMPLE_CONFIG) or uv_run(
        "inbox-autopilot", "run", EXAMPLE_MESSAGE, "-c", EXAMPLE_CONFIG, "--seed", "7"
    )


@task
def ci() -> int:
    failed = [name for name in ("lint", "typecheck", "test") if tasks[name]() != 0]
    if failed:
        print(f"Failed: {', '.join(failed)}")
        return 1
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Development tasks for inbox-autopilot")
    parser.add_argument("task", nargs="?", default="ci", choices=sorted(tasks))
    args = parser.parse_args(argv)
    return tasks[args.task]()


if __name__ == "__main__":
    raise SystemExit(main())
