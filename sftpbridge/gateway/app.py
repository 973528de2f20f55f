"""Module that exposes the dispatcher as an HTTP application."""

from fastapi import FastAPI
from fastapi.responses import Response

from sftpbridge.constants import VERSION
from .dispatcher import Dispatcher


def create_app(dispatcher: Dispatcher) -> FastAPI:
    """
    Create an application that serves every GET request through the dispatcher.

    The route is a plain function, so FastAPI runs it in its threadpool and the
    blocking SFTP calls of one request never hold up any other request.
    """
    app = FastAPI(
        title="sftpbridge",
        version=VERSION,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    @app.get("/{path:path}")
    def get(path: str) -> Response:
        return dispatcher.handle(path)

    return app
