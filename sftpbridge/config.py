"""Module for configuration variables with defaults that are overridable by a file."""

from __future__ import annotations

from configparser import ConfigParser, SectionProxy
from dataclasses import dataclass, field
import os
from typing import Mapping, Optional

import sftpbridge.constants as constants
from sftpbridge.logger import log


@dataclass
class RemoteConfig:
    """Configuration variables related to the remote SFTP server."""

    host: str = constants.DEFAULT_REMOTE_HOST
    port: int = constants.DEFAULT_REMOTE_PORT
    username: str = constants.DEFAULT_REMOTE_USERNAME

    # Every request path is resolved below this remote directory.
    root: str = constants.DEFAULT_REMOTE_ROOT

    key_path: str = os.path.expanduser(constants.DEFAULT_KEY_PATH)
    timeout: float = constants.DEFAULT_TIMEOUT

    @staticmethod
    def load(section: SectionProxy) -> RemoteConfig:
        """Load overridden variables from a section within a config file."""
        config = RemoteConfig()

        config.host = section.get("host", fallback=config.host)
        config.port = section.getint("port", fallback=config.port)
        config.username = section.get("username", fallback=config.username)
        config.root = section.get("root", fallback=config.root)
        config.key_path = os.path.expanduser(
            section.get("key_path", fallback=config.key_path)
        )
        config.timeout = section.getfloat("timeout", fallback=config.timeout)

        return config


@dataclass
class ServerConfig:
    """Configuration variables related to the HTTP side of the bridge."""

    port: int = constants.DEFAULT_PORT
    chunk_size: int = constants.DEFAULT_CHUNK_SIZE

    @staticmethod
    def load(section: SectionProxy) -> ServerConfig:
        """Load overridden variables from a section within a config file."""
        config = ServerConfig()

        config.port = section.getint("port", fallback=config.port)
        config.chunk_size = section.getint("chunk_size", fallback=config.chunk_size)

        return config

    def apply_environment(self, environ: Mapping[str, str]) -> None:
        """Override the listen port with the PORT environment variable, if set."""
        port = environ.get("PORT", "")

        if len(port) <= 0:
            return

        try:
            self.port = int(port)
        except ValueError:
            log.error(f"ignoring invalid PORT environment variable: {port!r}")


@dataclass
class Config:
    """Configuration variables."""

    remote: RemoteConfig = field(default_factory=RemoteConfig)
    server: ServerConfig = field(default_factory=ServerConfig)

    @staticmethod
    def load(filename: str, environ: Optional[Mapping[str, str]] = None) -> Config:
        """
        Load overridden configuration variables from a config file.

        Environment variables (os.environ by default) take precedence over the file.
        """
        parser = ConfigParser()

        config = Config()

        try:
            with open(os.path.expanduser(filename), "r") as f:
                parser.read_string(f.read(), filename)

            if "remote" in parser:
                config.remote = RemoteConfig.load(parser["remote"])
            if "server" in parser:
                config.server = ServerConfig.load(parser["server"])
        except FileNotFoundError:
            log.info(f"no config file at {filename}")
        except Exception as e:
            # An unreadable config file is not considered a fatal error since we can
            # fall back to defaults.
            log.error(f"failed to read config file {filename}: {e}")
        else:
            log.info(f"loaded config: {config}")

        config.server.apply_environment(os.environ if environ is None else environ)

        return config
