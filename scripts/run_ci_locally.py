#!/usr/bin/env python3
"""
Run the bibnames checks locally with the interpreter that runs this script.

Steps:
  1) black --check (line length 120) on the package, tests and scripts
  2) mypy on the package
  3) pytest tests/ with coverage of bibnames

Install the tools first with: pip install -e ".[dev]"
"""

import os
import subprocess
import sys
from pathlib import Path
from typing import Dict, List, Optional

REPO = Path(__file__).resolve().parent.parent
PACKAGE = "bibnames"
COVERAGE_FLOOR = 80


def run(cmd: List[str], env: Optional[Dict[str, str]] = None) -> None:
    print(">>>", " ".join(cmd))
    subprocess.run(cmd, check=True, cwd=str(REPO), env=env)


def main() -> None:
    run([sys.executable, "-m", "black", PACKAGE, "tests", "scripts", "--check", "--line-length", "120"])

    run([sys.executable, "-m", "mypy", PACKAGE, "--ignore-missing-imports"])

    env = os.environ.copy()
    env["PYTHONPATH"] = str(REPO)
    run(
        [
            sys.executable,
            "-m",
            "pytest",
            "tests/",
            f"--cov={PACKAGE}",
            "--cov-report=term-missing",
            f"--cov-fail-under={COVERAGE_FLOOR}",
        ],
        env=env,
    )

    print("\nALL CHECKS PASSED")


if __name__ == "__main__":
    try:
        main()
    except subprocess.CalledProcessError as e:
        print(f"\nCommand failed with exit code {e.returncode}", file=sys.stderr)
        sys.exit(e.returncode)
