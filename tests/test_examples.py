"""Smoke tests for example scripts.

These tests ensure that the example scripts can be imported and run their
main execution paths without raising exceptions.
"""

from __future__ import annotations

import subprocess
import sys
from pathlib import Path

# Determine the repo root
ROOT = Path(__file__).resolve().parents[1]


def test_mountain_car_qlearning_example_runs() -> None:
    """Test that examples/mountain_car_qlearning.py runs successfully."""
    script = ROOT / "examples" / "mountain_car_qlearning.py"
    assert script.exists(), f"Example script not found: {script}"

    result = subprocess.run(
        [sys.executable, str(script)],
        capture_output=True,
        text=True,
        check=False,
        timeout=120,
    )

    assert result.returncode == 0, (
        f"Example script failed with return code {result.returncode}.\n"
        f"STDOUT:\n{result.stdout}\n"
        f"STDERR:\n{result.stderr}"
    )

    assert "Features per observation: 171 (11 active)" in result.stdout
    assert "Greedy policy average return" in result.stdout, (
        "Expected output message not found in script output"
    )
