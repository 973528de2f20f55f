"""Module that maps request paths onto the remote file system."""

import posixpath
from typing import Tuple


class PathResolver:
    """
    Resolver of untrusted request paths to absolute paths below a remote root.

    Paths are normalized before checking that they stay within the root, so a path
    like /a/../b is fine while /../../etc/passwd is rejected.
    """

    def __init__(self, root: str):
        """Instantiate a resolver that confines all paths to the given root."""
        self._root = posixpath.normpath("/" + root.strip("/"))

    @property
    def root(self) -> str:
        """Normalized remote directory that all paths are confined to."""
        return self._root

    def resolve(self, request_path: str) -> Tuple[str, bool]:
        """
        Return the absolute remote path for the request path and whether it's allowed.

        A denied path is still returned (normalized) so it can be logged, but it must
        never be passed to the remote server.
        """
        remote_path = posixpath.normpath(
            posixpath.join(self._root, request_path.lstrip("/"))
        )

        if "\0" in request_path:
            return remote_path, False

        return remote_path, self._is_within_root(remote_path)

    def _is_within_root(self, path: str) -> bool:
        if self._root == "/":
            return path.startswith("/")

        return path == self._root or path.startswith(self._root + "/")
