"""
Module implementing the command-line interface and starting the HTTP server.

sftpbridge serves the file system of a remote machine, which is only reachable over
SFTP, as plain read-only HTTP. The private key used to authenticate is loaded once at
startup; every request then dials the remote machine with it, serves a directory listing
or file, and hangs up again.
"""

import signal
import sys
from typing import List, NoReturn, Optional

import uvicorn

from sftpbridge.config import Config
import sftpbridge.constants as constants
from sftpbridge.credentials import CredentialError, load_private_key
from sftpbridge.filesystem import PathResolver, SessionFactory
from sftpbridge.gateway import create_app, Dispatcher
import sftpbridge.logger as logger
from sftpbridge.logger import log
from .args import Arguments


def main(arguments: Optional[List[str]] = None) -> NoReturn:
    """
    Load the configuration and credentials and serve requests until interrupted.

    Defaults to parsing command-line arguments from sys.argv if none are specified.
    """
    # Parse command-line arguments.
    args = Arguments.parse(arguments)

    # Configure debug logging.
    logger.configure(args.debug)

    config = Config.load(args.config)

    # Without a usable key no request could ever be served.
    try:
        key = load_private_key(config.remote.key_path)
    except CredentialError as e:
        log.error(str(e))
        sys.exit(constants.BRIDGE_ERROR_CODE)

    dispatcher = Dispatcher(
        PathResolver(config.remote.root),
        SessionFactory(config.remote, key),
        config.server.chunk_size,
    )

    app = create_app(dispatcher)

    log.info(
        f"serving {config.remote.username}@{config.remote.host}:{config.remote.root} "
        f"on {constants.LISTEN_HOST}:{config.server.port}"
    )

    try:
        uvicorn.run(
            app,
            host=constants.LISTEN_HOST,
            port=config.server.port,
            log_level="debug" if args.debug else "info",
        )
        exit_code = 0
    except KeyboardInterrupt:
        exit_code = 128 + signal.SIGINT
    except Exception as e:
        log.error(f"failed to serve: {e}")
        exit_code = constants.BRIDGE_ERROR_CODE

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
