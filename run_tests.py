#!/usr/bin/env python
"""Test runner for Bedrock Gateway."""

import sys
import subprocess
import argparse

SUITES = {
    "unit": "tests/unit",
    "integration": "tests/integration",
}


def main():
    """Run the pytest suites selected on the command line."""
    parser = argparse.ArgumentParser(description="Run Bedrock Gateway tests")
    parser.add_argument("--unit", action="store_true", help="Run unit tests only")
    parser.add_argument("--integration", action="store_true", help="Run integration tests only")
    parser.add_argument("--coverage", action="store_true", help="Generate coverage report")
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")
    parser.add_argument("-k", dest="keyword", help="Only run tests matching the expression")
    parser.add_argument("--exitfirst", "-x", action="store_true", help="Stop on first failure")

    args = parser.parse_args()

    cmd = ["pytest"]
    cmd.extend(path for name, path in SUITES.items() if getattr(args, name))

    if args.keyword:
        cmd.extend(["-k", args.keyword])
    if args.exitfirst:
        cmd.append("-x")
    if args.verbose:
        cmd.append("-vv")

    if args.coverage:
        cmd.extend([
            "--cov=bedrock_gateway",
            "--cov-report=term-missing",
            "--cov-report=html"
        ])

    print(f"Running: {' '.join(cmd)}")
    result = subprocess.run(cmd, cwd=".")

    return result.returncode


if __name__ == "__main__":
    sys.exit(main())
