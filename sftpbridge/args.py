"""Module defining the command-line arguments and providing a parser for them."""

from __future__ import annotations

import argparse
from typing import List, Optional

from sftpbridge.constants import VERSION


class Arguments(argparse.Namespace):
    """Parsed command-line arguments."""

    config: str
    debug: bool

    @classmethod
    def parse(cls, args: Optional[List[str]] = None) -> Arguments:
        """
        Parse command-line arguments from the given list of strings.

        Defaults to sys.argv if none are specified.
        """
        return cls._get_parser().parse_args(args, namespace=cls())

    @classmethod
    def _get_parser(cls) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(
            description="Serve a remote SFTP file system as read-only HTTP.",
            usage="sftpbridge [option...]",
        )

        parser.add_argument(
            "--version",
            action="version",
            version=f"%(prog)s {VERSION}",
            help="show the program version",
        )

        # Path to (optional) config file
        parser.add_argument(
            "--config",
            type=str,
            help="path to config file (default is ~/.sftpbridge/config)",
            default="~/.sftpbridge/config",
        )

        # Enable debug output for development
        parser.add_argument(
            "--debug", action="store_true", help="enable debug information"
        )

        return parser
