"""Module that loads the private key used to authenticate with the remote server."""

import os.path

import paramiko
from paramiko.pkey import UnknownKeyType

from sftpbridge.logger import log


class CredentialError(RuntimeError):
    """Exception raised when the private key cannot be read or parsed."""


def load_private_key(path: str) -> paramiko.PKey:
    """
    Read a private key from disk and return it as a signer for public key auth.

    Any key type supported by paramiko is accepted. Keys protected by a passphrase
    are not supported since the bridge runs unattended.
    """
    path = os.path.expanduser(path)

    try:
        key = paramiko.PKey.from_path(path)
    except OSError as e:
        raise CredentialError(f"unable to read private key {path}: {e}")
    except (paramiko.SSHException, UnknownKeyType, ValueError, TypeError) as e:
        raise CredentialError(f"unable to parse private key {path}: {e}")

    log.info(f"loaded {key.get_name()} private key from {path}")

    return key
