from __future__ import annotations

import sys
from pathlib import Path

from rls.core.result import Err, Ok
from rls.platform.process import run


def test_run_returns_stdout(tmp_path: Path) -> None:
    result = run([sys.executable, "-c", "print('hi')"], cwd=tmp_path)
    assert result == Ok("hi\n")


def test_run_nonzero_exit(tmp_path: Path) -> None:
    result = run([sys.executable, "-c", "import sys; sys.exit(3)"], cwd=tmp_path)
    assert isinstance(result, Err)
    assert result.error.returncode == 3


def test_run_missing_binary(tmp_path: Path) -> None:
    result = run(["rls-definitely-not-a-binary"], cwd=tmp_path)
    assert isinstance(result, Err)
    assert result.error.returncode == -1


def test_run_timeout(tmp_path: Path) -> None:
    result = run([sys.executable, "-c", "import time; time.sleep(5)"], cwd=tmp_path, timeout=0.2)
    assert isinstance(result, Err)
    assert "timed out" in result.error.stderr
