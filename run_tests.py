#!/usr/bin/env python
"""Run the tokenapi test suite.

Extra arguments are passed straight to pytest, e.g.
``python run_tests.py -k executor`` or ``python run_tests.py tests/test_cli.py``.
Without a path, pytest falls back to ``testpaths`` from pyproject.toml.
"""

import os
import subprocess
import sys
from pathlib import Path


def main(argv: list[str]) -> int:
    os.chdir(Path(__file__).parent)

    cmd = [sys.executable, "-m", "pytest", "-v", "--color=yes", *argv]

    print(f"Running: {' '.join(cmd)}")
    return subprocess.run(cmd).returncode


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
