"""Shared fixtures: a synthetic home directory per test."""

import textwrap
from pathlib import Path
from typing import Callable, Union

import pytest

from gamedetector.config import DetectorConfig
from gamedetector.discovery.hints import SourceHints


@pytest.fixture
def home(tmp_path: Path) -> Path:
    path = tmp_path / "home"
    path.mkdir()
    return path


@pytest.fixture
def config(home: Path) -> DetectorConfig:
    """Config with XDG defaults below the synthetic home."""
    return DetectorConfig.for_home(home)


@pytest.fixture(scope="session")
def hints() -> SourceHints:
    return SourceHints()


@pytest.fixture
def write() -> Callable[..., Path]:
    """Write dedented text (or bytes) to a path, creating parents."""
    def _write(path: Path, content: Union[str, bytes], dedent: bool = True) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(textwrap.dedent(content) if dedent else content, encoding="utf-8")
        return path
    return _write


@pytest.fixture
def touch() -> Callable[[Path], Path]:
    """Create an empty file (e.g. an image), creating parents."""
    def _touch(path: Path) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(b"")
        return path
    return _touch
