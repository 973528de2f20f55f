"""
Modules that give access to the remote file system over SFTP.

The remote server is only reachable through SSH with public key authentication, so the
bridge dials it, authenticates and negotiates an SFTP client for every HTTP request it
serves. That is costly (a full handshake per request), but it means that no connection
is ever used by more than one request at a time and a broken connection can never affect
anything but the request that opened it.

Paths from HTTP requests are untrusted. They are resolved below a fixed remote root and
anything that would escape it after normalization is rejected before a session is even
opened.
"""

from .common import SessionError, SessionTimeoutError, StatInfo
from .paths import PathResolver
from .session import open_session, Session, SessionFactory

__all__ = [
    "open_session",
    "PathResolver",
    "Session",
    "SessionError",
    "SessionFactory",
    "SessionTimeoutError",
    "StatInfo",
]
