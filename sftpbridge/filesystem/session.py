"""Module that manages SFTP sessions with the remote server."""

from __future__ import annotations

import socket
from typing import IO, List, Optional

import paramiko

from sftpbridge.config import RemoteConfig
from sftpbridge.filesystem.common import SessionError, SessionTimeoutError, StatInfo
from sftpbridge.logger import log


class Session:
    """
    An SSH transport and the SFTP client running on top of it.

    A session belongs to a single request and is never shared. Closing it releases
    both the SFTP client and the underlying transport.
    """

    def __init__(self, transport: paramiko.Transport, client: paramiko.SFTPClient):
        """Wrap an authenticated transport and its SFTP client."""
        self._transport = transport
        self._client = client
        self._closed = False

    @property
    def closed(self) -> bool:
        """Whether close() has been called."""
        return self._closed

    def stat(self, path: str) -> StatInfo:
        """Return the attributes of a remote path that decide how it is served."""
        return StatInfo.from_attributes(self._client.stat(path))

    def listdir(self, path: str) -> List[str]:
        """Return the entry names of a remote directory in server order."""
        return self._client.listdir(path)

    def open(self, path: str) -> IO[bytes]:
        """Open a remote file for reading in binary mode."""
        return self._client.open(path, "rb")

    def close(self) -> None:
        """Close the SFTP client and the transport. Safe to call more than once."""
        if self._closed:
            return

        self._closed = True

        try:
            self._client.close()
        finally:
            self._transport.close()

    def __enter__(self) -> Session:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()


def open_session(config: RemoteConfig, key: paramiko.PKey) -> Session:
    """
    Dial the remote server, authenticate with the key and negotiate an SFTP client.

    Raises SessionError (or SessionTimeoutError) on failure, after cleaning up
    whatever had already been set up.
    """
    endpoint = f"{config.username}@{config.host}:{config.port}"
    sock: Optional[socket.socket] = None
    transport: Optional[paramiko.Transport] = None

    try:
        sock = socket.create_connection((config.host, config.port), config.timeout)

        transport = paramiko.Transport(sock)
        transport.banner_timeout = config.timeout
        transport.connect(username=config.username, pkey=key)

        client = paramiko.SFTPClient.from_transport(transport)

        if client is None:
            raise SessionError(f"unable to start sftp subsystem on {endpoint}")
    except socket.timeout:
        _close_quietly(sock, transport)
        raise SessionTimeoutError(f"unable to connect to {endpoint}: timed out")
    except (OSError, paramiko.SSHException) as e:
        _close_quietly(sock, transport)
        raise SessionError(f"unable to connect to {endpoint}: {e}")
    except SessionError:
        _close_quietly(sock, transport)
        raise

    log.debug(f"opened session to {endpoint}")

    return Session(transport, client)


def _close_quietly(
    sock: Optional[socket.socket], transport: Optional[paramiko.Transport]
) -> None:
    # The transport owns the socket once it has been created.
    try:
        if transport is not None:
            transport.close()
        elif sock is not None:
            sock.close()
    except Exception as e:
        log.warning(f"failed to close connection: {e}")


class SessionFactory:
    """Callable that opens a fresh session for every request."""

    def __init__(self, config: RemoteConfig, key: paramiko.PKey):
        """Bind the remote configuration and the private key used to authenticate."""
        self._config = config
        self._key = key

    def __call__(self) -> Session:
        return open_session(self._config, self._key)
