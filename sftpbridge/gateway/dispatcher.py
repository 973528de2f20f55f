"""Module that turns HTTP requests into operations on the remote file system."""

import mimetypes
from typing import Callable

from fastapi.responses import PlainTextResponse, Response
import paramiko

from sftpbridge.constants import DEFAULT_CHUNK_SIZE
from sftpbridge.filesystem import (
    PathResolver,
    Session,
    SessionError,
    SessionTimeoutError,
)
from sftpbridge.logger import log, summarize
from .listing import MEDIA_TYPE as LISTING_MEDIA_TYPE, render_directory
from .streaming import FileStreamer, FileStreamingResponse


class Dispatcher:
    """
    Entry point that serves a single request path from the remote file system.

    Every request gets its own session, which is always closed by the time the
    response is complete: right away for errors and directory listings, and by the
    streamer once the last byte of a file has been sent.
    """

    def __init__(
        self,
        resolver: PathResolver,
        session_factory: Callable[[], Session],
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ):
        """Instantiate a dispatcher that opens sessions with the given factory."""
        self._resolver = resolver
        self._session_factory = session_factory
        self._chunk_size = chunk_size

    def handle(self, request_path: str) -> Response:
        """Serve the request path as a directory listing or file download."""
        remote_path, allowed = self._resolver.resolve(request_path)

        if not allowed:
            log.warning(f"denied access to {summarize(request_path)}")
            return PlainTextResponse("not an allowed path", status_code=403)

        try:
            session = self._session_factory()
        except SessionTimeoutError as e:
            log.error(f"failed to open session for {remote_path}: {e}")
            return PlainTextResponse(str(e), status_code=504)
        except SessionError as e:
            log.error(f"failed to open session for {remote_path}: {e}")
            return PlainTextResponse(str(e), status_code=502)

        try:
            return self._dispatch(session, remote_path)
        except BaseException:
            session.close()
            raise

    def _dispatch(self, session: Session, remote_path: str) -> Response:
        try:
            info = session.stat(remote_path)
        except (OSError, paramiko.SSHException) as e:
            log.info(f"failed to stat {remote_path}: {e}")
            session.close()
            return PlainTextResponse(str(e), status_code=404)

        if info.is_directory:
            return self._serve_directory(session, remote_path)
        else:
            return self._serve_file(session, remote_path)

    def _serve_directory(self, session: Session, remote_path: str) -> Response:
        log.debug(f"listing directory {remote_path}")

        try:
            entries = session.listdir(remote_path)
        except (OSError, paramiko.SSHException) as e:
            log.error(f"failed to list {remote_path}: {e}")
            return PlainTextResponse(
                f"unable to list directory: {e}", status_code=500
            )
        finally:
            session.close()

        return Response(render_directory(entries), media_type=LISTING_MEDIA_TYPE)

    def _serve_file(self, session: Session, remote_path: str) -> Response:
        streamer = FileStreamer(session, remote_path, self._chunk_size)

        try:
            size = streamer.open()
        except FileNotFoundError as e:
            log.info(f"failed to open {remote_path}: {e}")
            streamer.close()
            return PlainTextResponse(str(e), status_code=404)
        except (OSError, paramiko.SSHException) as e:
            log.error(f"failed to open {remote_path}: {e}")
            streamer.close()
            return PlainTextResponse(str(e), status_code=500)

        log.debug(f"streaming file {remote_path} ({size} bytes)")

        media_type = mimetypes.guess_type(remote_path)[0] or "application/octet-stream"

        return FileStreamingResponse(
            streamer,
            media_type=media_type,
            headers={"Content-Length": str(size)},
        )
