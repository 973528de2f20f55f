"""Module that streams remote files into HTTP responses."""

from typing import Any, AsyncIterator, Iterator, Optional

import anyio
from fastapi.responses import StreamingResponse
import paramiko
from starlette.concurrency import run_in_threadpool
from starlette.types import Receive, Scope, Send

from sftpbridge.constants import DEFAULT_CHUNK_SIZE
from sftpbridge.filesystem import Session
from sftpbridge.logger import log


class FileStreamer:
    """
    Streamer of the contents of a single remote file.

    Reads from SFTP files can't be relied upon to signal the end of the file, so the
    size of the open file is used as the authoritative total and the stream ends as
    soon as that many bytes have been read, without issuing another read.

    The streamer owns the session it is given: close() releases both the remote file
    and the session, and is called automatically when the stream ends.
    """

    def __init__(
        self, session: Session, remote_path: str, chunk_size: int = DEFAULT_CHUNK_SIZE
    ):
        """Instantiate a streamer for a remote path within an open session."""
        self._session = session
        self._remote_path = remote_path
        self._chunk_size = chunk_size

        self._handle: Optional[paramiko.SFTPFile] = None
        self._closed = False

        self.bytes_remaining = 0

    def open(self) -> int:
        """
        Open the remote file and return its size in bytes.

        Raises FileNotFoundError if the file doesn't exist and OSError for other I/O
        failures. The caller remains responsible for calling close() in that case.
        """
        self._handle = self._session.open(self._remote_path)
        self.bytes_remaining = self._handle.stat().st_size or 0

        return self.bytes_remaining

    def chunks(self) -> Iterator[bytes]:
        """Yield the contents of the opened file in order and close it afterwards."""
        if self._handle is None:
            raise RuntimeError(f"{self._remote_path} must be opened before streaming")

        try:
            while self.bytes_remaining > 0:
                size = min(self._chunk_size, self.bytes_remaining)

                try:
                    chunk = self._handle.read(size)
                except (OSError, paramiko.SSHException) as e:
                    # Headers and part of the body have already been sent, so all that
                    # can be done is to cut the response short.
                    log.error(
                        f"failed to read {self._remote_path} "
                        f"({self.bytes_remaining} bytes left): {e}"
                    )
                    return

                if not chunk:
                    log.warning(
                        f"short read of {self._remote_path} "
                        f"({self.bytes_remaining} bytes left)"
                    )
                    return

                chunk = chunk[: self.bytes_remaining]
                self.bytes_remaining -= len(chunk)

                yield chunk
        finally:
            self.close()

    def close(self) -> None:
        """Release the remote file and the session. Safe to call more than once."""
        if self._closed:
            return

        self._closed = True

        try:
            if self._handle is not None:
                self._handle.close()
        except (OSError, paramiko.SSHException) as e:
            log.warning(f"failed to close {self._remote_path}: {e}")
        finally:
            self._session.close()


async def iterate_closing(streamer: FileStreamer) -> AsyncIterator[bytes]:
    """
    Adapt a streamer to an async iterator for use as a streaming response body.

    Every blocking read runs in the threadpool. When the response finishes or is
    cancelled because the client went away, the streamer is closed so the remote read
    loop stops and the session is released right away.
    """
    chunks = streamer.chunks()

    def release() -> None:
        chunks.close()
        streamer.close()

    try:
        while True:
            chunk = await run_in_threadpool(next, chunks, None)

            if chunk is None:
                break

            yield chunk
    finally:
        with anyio.CancelScope(shield=True):
            await run_in_threadpool(release)


class FileStreamingResponse(StreamingResponse):
    """
    Streaming response that releases its streamer however the response ends.

    If the client is gone before the body is iterated, or the response is cancelled
    between two sends, the body iterator may never get to clean up after itself.
    """

    def __init__(self, streamer: FileStreamer, **kwargs: Any):
        """Instantiate a response that streams and finally closes the streamer."""
        super().__init__(iterate_closing(streamer), **kwargs)
        self._streamer = streamer

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        try:
            await super().__call__(scope, receive, send)
        finally:
            with anyio.CancelScope(shield=True):
                await self.body_iterator.aclose()
                await run_in_threadpool(self._streamer.close)
