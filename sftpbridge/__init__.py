"""Read-only HTTP gateway to a file system that is only reachable over SFTP."""
