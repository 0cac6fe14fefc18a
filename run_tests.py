#!/usr/bin/env python3
"""
Test runner script for the blog API.
Provides convenient commands to run different groups of tests.
"""

import argparse
import subprocess
import sys
from pathlib import Path

GROUPS = {
    "all": ["tests/"],
    "unit": [
        "tests/test_utils.py",
        "tests/test_content_blocks.py",
        "tests/test_models.py",
        "tests/test_repositories.py",
        "tests/test_services.py",
    ],
    "integration": ["tests/test_integration.py"],
    "models": ["tests/test_models.py"],
    "repositories": ["tests/test_repositories.py"],
    "services": ["tests/test_services.py"],
    "routes": ["tests/test_routes.py"],
    "utils": ["tests/test_utils.py", "tests/test_content_blocks.py"],
    "cli": ["tests/test_cli.py"],
    "coverage": ["tests/"],
}


def run_command(cmd: list[str], description: str) -> int:
    """Run a command and return the exit code."""
    print(f"\n{'='*60}")
    print(f"Running: {description}")
    print(f"Command: {' '.join(cmd)}")
    print(f"{'='*60}")

    result = subprocess.run(cmd, cwd=Path(__file__).parent)
    return result.returncode


def main():
    parser = argparse.ArgumentParser(description="Run tests for the blog API")
    parser.add_argument("test_type", choices=sorted(GROUPS), help="Group of tests to run")
    parser.add_argument("--verbose", "-v", action="store_true", help="Run tests in verbose mode")
    parser.add_argument("--coverage", "-c", action="store_true", help="Run with coverage report")
    parser.add_argument("--html-coverage", action="store_true", help="Generate HTML coverage report")

    args = parser.parse_args()

    cmd = [sys.executable, "-m", "pytest"]
    if args.verbose:
        cmd.append("-v")
    if args.coverage or args.test_type == "coverage":
        cmd.extend(["--cov=blogapi", "--cov-report=term-missing"])
        if args.html_coverage or args.test_type == "coverage":
            cmd.append("--cov-report=html:htmlcov")
    cmd.extend(GROUPS[args.test_type])

    description = f"{args.test_type.title()} tests"
    exit_code = run_command(cmd, description)

    if exit_code == 0:
        print(f"\n{description} completed successfully")
    else:
        print(f"\n{description} failed with exit code {exit_code}")
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
