#!/usr/bin/env python3
"""Run repository checks: ruff, pyright, and the pytest suite.

Exits non-zero on the first failing step so CI and local tooling can observe status.
"""

from __future__ import annotations

import argparse
import subprocess
import sys

TARGETS = ["asset_studio", "tests", "scripts"]


def run(cmd: list[str]) -> int:
    print("=>", " ".join(cmd))
    return subprocess.run(cmd, check=False).returncode


def main() -> int:
    parser = argparse.ArgumentParser()
    parser.add_argument("--fix", action="store_true", help="Let ruff apply safe fixes")
    parser.add_argument("--no-tests", action="store_true", help="Skip running pytest")
    parser.add_argument("pytest_args", nargs=argparse.REMAINDER, help="Extra arguments passed to pytest")
    args = parser.parse_args()

    ruff = [sys.executable, "-m", "ruff", "check", *TARGETS]
    if args.fix:
        ruff.append("--fix")
    steps: list[tuple[str, list[str]]] = [
        ("ruff", ruff),
        ("pyright", [sys.executable, "-m", "pyright"]),
    ]
    if not args.no_tests:
        extra = [a for a in args.pytest_args if a != "--"]
        steps.append(("pytest", [sys.executable, "-m", "pytest", "-q", *extra]))

    for name, cmd in steps:
        rc = run(cmd)
        if rc != 0:
            print(f"{name} failed")
            return rc

    print("All checks passed")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
