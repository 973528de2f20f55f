import re

from sftpbridge.gateway.listing import render_directory


def test_links_in_order():
    html = render_directory(["b.txt", "a.txt", "c"]).decode()

    assert re.findall(r"<a href='([^']*)'>([^<]*)</a>", html) == [
        ("b.txt", "b.txt"),
        ("a.txt", "a.txt"),
        ("c", "c"),
    ]


def test_one_link_per_entry():
    entries = [f"file{i}.deb" for i in range(50)]

    html = render_directory(entries).decode()

    assert html.count("<a ") == len(entries)


def test_empty_directory():
    assert render_directory([]) == b"<html></html>"


def test_document_structure():
    html = render_directory(["a.txt"])

    assert html == b"<html><a href='a.txt'>a.txt</a><br/>\n</html>"


def test_utf8_names():
    html = render_directory(["résumé.pdf"])

    assert "résumé.pdf".encode("utf-8") in html
