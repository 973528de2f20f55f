import pytest
from fastapi.testclient import TestClient

from conftest import FakeHandle, FakeSession, FakeSessionFactory
from sftpbridge.filesystem import PathResolver
from sftpbridge.gateway import create_app, Dispatcher


ROOT = "/home/ftpubuntu"


@pytest.fixture
def remote():
    return FakeSession(
        files={
            f"{ROOT}/reports/a.txt": FakeHandle(b"alpha\n"),
            f"{ROOT}/stable/image.iso": FakeHandle(
                bytes(range(256)) * 40, chunk_sizes=(1000, 17, 4096)
            ),
        },
        directories={
            ROOT: ["reports", "stable"],
            f"{ROOT}/reports": ["a.txt", "b.txt"],
            f"{ROOT}/stable": ["image.iso"],
        },
    )


@pytest.fixture
def factory(remote):
    return FakeSessionFactory(remote)


@pytest.fixture
def client(factory):
    app = create_app(Dispatcher(PathResolver(ROOT), factory, chunk_size=512))
    return TestClient(app)


def test_directory_listing(client, remote):
    resp = client.get("/reports")

    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/html")
    assert resp.text.index("a.txt") < resp.text.index("b.txt")
    assert resp.text.count("<a ") == 2
    assert remote.close_count == 1


def test_root_listing(client):
    resp = client.get("/")

    assert resp.status_code == 200
    assert "<a href='stable'>stable</a>" in resp.text


def test_file_download(client, remote):
    resp = client.get("/stable/image.iso")

    assert resp.status_code == 200
    assert resp.headers["content-length"] == str(256 * 40)
    assert resp.content == bytes(range(256)) * 40
    assert remote.close_count == 1


def test_text_file(client):
    resp = client.get("/reports/a.txt")

    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/plain")
    assert resp.content == b"alpha\n"


def test_not_found(client, remote):
    resp = client.get("/missing.txt")

    assert resp.status_code == 404
    assert "No such file" in resp.text
    assert remote.close_count == 1


def test_encoded_traversal_denied(client, factory):
    resp = client.get("/..%2F..%2Fetc%2Fpasswd")

    assert resp.status_code == 403
    assert resp.text == "not an allowed path"
    assert factory.open_count == 0


def test_read_only(client, factory):
    assert client.put("/reports/a.txt", content=b"x").status_code == 405
    assert client.delete("/reports/a.txt").status_code == 405
    assert factory.open_count == 0


def test_no_api_docs(client, remote):
    client.get("/docs")

    # /docs is just another remote path
    assert remote.calls == [f"stat {ROOT}/docs"]
