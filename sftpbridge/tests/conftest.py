"""Module that adds flags to pytest and provides fakes of the remote file system."""

import errno
import itertools
from typing import Dict, Iterable, List, Optional

import paramiko
import pytest

from sftpbridge.filesystem import StatInfo


def pytest_addoption(parser):
    parser.addoption(
        "--sftp",
        action="store_true",
        default=False,
        help="Run tests against a real SFTP server",
    )


def pytest_configure(config):
    config.addinivalue_line("markers", "sftp: mark test as requiring an SFTP server")


def pytest_collection_modifyitems(config, items):
    if not config.getoption("--sftp"):
        skip_sftp = pytest.mark.skip(reason="only runs with --sftp option")

        for item in items:
            if "sftp" in item.keywords:
                item.add_marker(skip_sftp)


class FakeHandle:
    """
    Remote file that hands out data in chunks of the given sizes.

    Like the SFTP reads that motivate the byte counting in the streamer, it never
    signals the end of the file: reads past the end keep returning filler bytes.
    """

    def __init__(
        self,
        data: bytes,
        chunk_sizes: Iterable[int] = (1024,),
        reported_size: Optional[int] = None,
        fail_at: Optional[int] = None,
    ):
        self.data = data
        self.position = 0
        self.reads = 0
        self.close_count = 0

        self._chunk_sizes = itertools.cycle(chunk_sizes)
        self._reported_size = len(data) if reported_size is None else reported_size
        self._fail_at = fail_at

    def stat(self) -> paramiko.SFTPAttributes:
        attributes = paramiko.SFTPAttributes()
        attributes.st_size = self._reported_size
        return attributes

    def read(self, size: int) -> bytes:
        self.reads += 1

        if self._fail_at is not None and self.position >= self._fail_at:
            raise OSError(errno.EIO, "connection lost")

        size = min(size, next(self._chunk_sizes))

        if self.position >= len(self.data):
            return b"\xff" * size

        chunk = self.data[self.position : self.position + size]
        self.position += len(chunk)

        return chunk

    def close(self) -> None:
        self.close_count += 1


class FakeSession:
    """Session on an in-memory file system that records how it is used."""

    def __init__(
        self,
        files: Optional[Dict[str, FakeHandle]] = None,
        directories: Optional[Dict[str, List[str]]] = None,
    ):
        self.files = files or {}
        self.directories = directories or {}

        self.calls: List[str] = []
        self.close_count = 0

    def stat(self, path: str) -> StatInfo:
        self.calls.append(f"stat {path}")

        if path in self.directories:
            return StatInfo(is_directory=True, size_bytes=4096)
        elif path in self.files:
            return StatInfo(is_directory=False, size_bytes=len(self.files[path].data))
        else:
            raise FileNotFoundError(errno.ENOENT, "No such file")

    def listdir(self, path: str) -> List[str]:
        self.calls.append(f"listdir {path}")

        if path not in self.directories:
            raise PermissionError(errno.EACCES, "Permission denied")

        return list(self.directories[path])

    def open(self, path: str) -> FakeHandle:
        self.calls.append(f"open {path}")

        if path not in self.files:
            raise FileNotFoundError(errno.ENOENT, "No such file")

        return self.files[path]

    def close(self) -> None:
        self.close_count += 1


class FakeSessionFactory:
    """Session factory that hands out the same fake session and counts how often."""

    def __init__(self, session: Optional[FakeSession] = None):
        self.session = session or FakeSession()
        self.open_count = 0

    def __call__(self) -> FakeSession:
        self.open_count += 1
        return self.session


@pytest.fixture
def fake_session():
    return FakeSession()


@pytest.fixture
def session_factory(fake_session):
    return FakeSessionFactory(fake_session)
