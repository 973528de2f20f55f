"""Data structures and exceptions used by multiple file system components."""

from __future__ import annotations

from dataclasses import dataclass
import stat

import paramiko


@dataclass
class StatInfo:
    """The attributes of a remote path that decide how it is served."""

    is_directory: bool
    size_bytes: int

    @staticmethod
    def from_attributes(attributes: paramiko.SFTPAttributes) -> StatInfo:
        """Instantiate from the attributes returned by an SFTP stat call."""
        mode = attributes.st_mode or 0
        size = attributes.st_size or 0

        return StatInfo(is_directory=stat.S_ISDIR(mode), size_bytes=size)


class SessionError(RuntimeError):
    """Exception raised when a session with the remote server cannot be set up."""


class SessionTimeoutError(SessionError):
    """Exception raised when the remote server did not respond in time."""
