"""Module that renders remote directory listings as HTML."""

from typing import List

MEDIA_TYPE = "text/html"


def render_directory(entries: List[str]) -> bytes:
    """
    Render a minimal HTML index with one link per directory entry.

    Entries are linked in the order they were listed by the remote server. Names are
    used as-is for both the link target and the link text.
    """
    parts = ["<html>"]

    for name in entries:
        parts.append(f"<a href='{name}'>{name}</a><br/>\n")

    parts.append("</html>")

    return "".join(parts).encode("utf-8")
