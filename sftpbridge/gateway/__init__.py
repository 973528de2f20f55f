"""
Modules that serve the remote file system over HTTP.

There is a single catch-all GET route. The dispatcher resolves the request path, opens a
session, stats the remote path and then either renders a directory listing or streams
the file. Directory listings are small and rendered in one go, after which the session
is closed immediately. Files are streamed and the session stays open until the last byte
has been sent or the client has gone away.
"""

from .app import create_app
from .dispatcher import Dispatcher
from .listing import render_directory
from .streaming import FileStreamer, FileStreamingResponse, iterate_closing

__all__ = [
    "create_app",
    "Dispatcher",
    "FileStreamer",
    "FileStreamingResponse",
    "iterate_closing",
    "render_directory",
]
