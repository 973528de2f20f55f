"""Module defining various global constants."""

# sftpbridge version
VERSION = "1.0.0"

# Special exit code for when sftpbridge itself fails to start.
BRIDGE_ERROR_CODE = 254

# The bridge allows inspection of the entire home directory of the remote user, so it
# must only ever be reachable from the local machine. 172.17.0.1 is the docker bridge,
# which is close enough to localhost.
LISTEN_HOST = "172.17.0.1"

# Listen port used when neither the PORT environment variable nor the config file
# specify one.
DEFAULT_PORT = 8080

# Remote SFTP endpoint defaults
DEFAULT_REMOTE_HOST = "depot.kde.org"
DEFAULT_REMOTE_PORT = 22
DEFAULT_REMOTE_USERNAME = "ftpneon"
DEFAULT_REMOTE_ROOT = "/home/ftpubuntu"
DEFAULT_KEY_PATH = "~/.ssh/id_rsa"

# Seconds to wait for the TCP connection and SSH banner before giving up.
DEFAULT_TIMEOUT = 30

# Number of bytes requested from the remote per read while streaming a file.
DEFAULT_CHUNK_SIZE = 32 * 1024
