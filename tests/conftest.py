from pathlib import Path
from typing import Callable

import pytest


@pytest.fixture
def make_file(tmp_path: Path) -> Callable[..., str]:
    """Write `data` to a fresh file and return its path."""

    def _make(data: bytes, name: str = "data.bin") -> str:
        path = tmp_path / name
        path.write_bytes(data)
        return str(path)

    return _make


@pytest.fixture
def pattern_file(make_file) -> Callable[[int], str]:
    """A file whose byte at offset i is i % 251, so no two windows look alike."""

    def _make(size: int = 4096) -> str:
        return make_file(bytes(i % 251 for i in range(size)))

    return _make
