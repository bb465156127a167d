"""Shared fixtures for picshelf tests."""

import zipfile
from pathlib import Path
from typing import Callable, Dict, Union

import pytest

ZipFactory = Callable[..., Path]


@pytest.fixture
def make_zip(tmp_path: Path) -> ZipFactory:
    """Return a factory writing zip archives into ``tmp_path``.

    Entries are written in insertion order; names ending with ``/`` become
    directory entries.
    """

    def _make_zip(
        entries: Dict[str, Union[bytes, str]],
        name: str = "archive.zip",
        compression: int = zipfile.ZIP_DEFLATED,
    ) -> Path:
        path = tmp_path / name
        with zipfile.ZipFile(path, "w", compression=compression) as zf:
            for entry, content in entries.items():
                if entry.endswith("/"):
                    zf.writestr(zipfile.ZipInfo(entry), b"")
                else:
                    zf.writestr(entry, content)
        return path

    return _make_zip


@pytest.fixture
def touch() -> Callable[..., Path]:
    """Return a helper creating a file and any missing parent directories."""

    def _touch(path: Path, content: bytes = b"") -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
        return path

    return _touch
