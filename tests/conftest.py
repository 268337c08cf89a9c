"""Shared fixtures for the mediascan test suite."""

import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional

import pytest

from mediascan.models.core import Category, FileRecord

CREATED = datetime(2025, 1, 2, 3, 4, 5)
MODIFIED = datetime(2025, 6, 7, 8, 9, 10)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path_factory, monkeypatch):
    """Point the config file at an empty temp dir and clear MEDIASCAN_* env vars.

    Keeps a developer's real ``~/.config/mediascan`` out of the tests.
    """
    from mediascan.utils import config as cfg

    config_dir = tmp_path_factory.mktemp("config") / "mediascan"
    monkeypatch.setattr(cfg, "CONFIG_DIR", config_dir)
    monkeypatch.setattr(cfg, "CONFIG_FILE", config_dir / "config.toml")
    for name in [n for n in os.environ if n.startswith("MEDIASCAN_")]:
        monkeypatch.delenv(name)
    return config_dir


@pytest.fixture
def make_file() -> Callable[[Path, int], Path]:
    """Return a helper creating a file of *size* bytes (and its parents)."""

    def _make(path: Path, size: int = 0) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(b"\0" * size)
        return path

    return _make


@pytest.fixture
def make_record(tmp_path: Path) -> Callable[..., FileRecord]:
    """Return a factory for FileRecords that do not need to exist on disk."""

    def _make(
        name: str,
        size: int = 0,
        category: Optional[Category] = None,
        directory: Optional[Path] = None,
    ) -> FileRecord:
        directory = directory or tmp_path
        return FileRecord(
            name=name,
            path=directory / name,
            directory=directory,
            extension=Path(name).suffix.lower(),
            size=size,
            created=CREATED,
            modified=MODIFIED,
            category=category,
        )

    return _make


@pytest.fixture
def media_tree(tmp_path: Path, make_file) -> Path:
    """Create a small library with every category, noise and hidden entries.

    Layout::

        library/
            song.mp3            1536  Audio
            Track.FLAC          2048  Audio
            movie.mkv           4096  Video
            secrets.kdbx          64  Vault
            notes.txt             10  (no category)
            README                 1  (no extension)
            .dotfile.mp3           5  hidden
            .hidden/ghost.mp3      5  hidden
            Album/deep.ogg       100  Audio
            Photos/cat.JPG       300  Picture
            Photos/vacation/beach.png  500  Picture
    """
    root = tmp_path / "library"
    make_file(root / "song.mp3", 1536)
    make_file(root / "Track.FLAC", 2048)
    make_file(root / "movie.mkv", 4096)
    make_file(root / "secrets.kdbx", 64)
    make_file(root / "notes.txt", 10)
    make_file(root / "README", 1)
    make_file(root / ".dotfile.mp3", 5)
    make_file(root / ".hidden" / "ghost.mp3", 5)
    make_file(root / "Album" / "deep.ogg", 100)
    make_file(root / "Photos" / "cat.JPG", 300)
    make_file(root / "Photos" / "vacation" / "beach.png", 500)
    return root


@pytest.fixture
def make_undecodable_file() -> Callable[[Path], Path]:
    """Return a helper creating ``bad<0xff>.mp3``, a name that is not valid UTF-8.

    Skips the test on filesystems that only accept UTF-8 names.
    """

    def _make(directory: Path) -> Path:
        if sys.platform == "win32":
            pytest.skip("names are always Unicode on Windows")
        raw_name = b"bad\xff.mp3"
        directory.mkdir(parents=True, exist_ok=True)
        try:
            with open(os.path.join(os.fsencode(directory), raw_name), "wb") as f:
                f.write(b"\0" * 10)
        except OSError:
            pytest.skip("filesystem rejects names that are not valid UTF-8")
        return directory / os.fsdecode(raw_name)

    return _make
