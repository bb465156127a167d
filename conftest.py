"""Configure pytest."""

import os
import sys
from pathlib import Path

import pytest

# Get the project root directory
root_dir = Path(__file__).parent

# Add src directory to Python path
src_path = str(root_dir / "src")
if src_path not in sys.path:
    sys.path.insert(0, src_path)

# Remove any duplicate paths
sys.path = list(dict.fromkeys(sys.path))

# Set PYTHONPATH environment variable
os.environ["PYTHONPATH"] = src_path


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep user settings and PICSHELF_* variables out of every test."""
    for name in list(os.environ):
        if name.startswith("PICSHELF_"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg-config"))
    from picshelf.utils import config as cfg

    config_dir = tmp_path / "xdg-config" / "picshelf"
    monkeypatch.setattr(cfg, "CONFIG_DIR", config_dir)
    monkeypatch.setattr(cfg, "CONFIG_FILE", config_dir / "config.toml")
