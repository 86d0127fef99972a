import os
import sys
from pathlib import Path

import pytest

# Ensure the 'src' directory is in the python path so we can import osbuild_ks
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../src')))


@pytest.fixture
def ks_dir(tmp_path: Path) -> Path:
    """An empty include directory for one test."""
    return tmp_path


@pytest.fixture
def write_ks(ks_dir: Path):
    """Writes a Kickstart file into `ks_dir` and returns its path."""
    def _write(name: str, content: str) -> Path:
        path = ks_dir / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path
    return _write
