"""Shared test fixtures for the fused_reader test suite.

WHY: Most tests need in-memory member streams whose close() calls can be
counted, and a few need real files on disk.

HOW: TrackingStream is a BytesIO that counts close() calls. FailingCloseStream
raises from close(). The make_files fixture writes named files into tmp_path.

RULES:
- Streams are binary; contents are bytes literals
- File I/O tests use tmp_path for isolation
"""

import io
from typing import Dict, List

import pytest


class TrackingStream(io.BytesIO):
    """BytesIO that records how many times close() was called."""

    def __init__(self, data: bytes = b"") -> None:
        super().__init__(data)
        self.close_count = 0

    def close(self) -> None:
        self.close_count += 1
        super().close()


class FailingCloseStream(TrackingStream):
    """A stream whose close() always fails."""

    def close(self) -> None:
        self.close_count += 1
        raise OSError("close failed")


@pytest.fixture
def streams():
    """Factory: streams(b"a", b"b") -> list of TrackingStream."""

    def _make(*contents: bytes) -> List[TrackingStream]:
        return [TrackingStream(data) for data in contents]

    return _make


@pytest.fixture
def make_files(tmp_path):
    """Factory: make_files({"a.txt": b"..."}) -> list of path strings, in order."""

    def _make(files: Dict[str, bytes]) -> List[str]:
        paths = []
        for name, data in files.items():
            path = tmp_path / name
            path.write_bytes(data)
            paths.append(str(path))
        return paths

    return _make


@pytest.fixture
def failing_stream():
    """Factory: failing_stream(b"data") -> FailingCloseStream."""
    return FailingCloseStream
