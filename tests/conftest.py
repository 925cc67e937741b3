import pytest
from fastapi.testclient import TestClient

from landing.auth import MemoryCredentialStore
from landing.avatar import MemoryAvatarStore
from landing.content import MemoryContentStore
from landing.main import create_app


PASSWORD_HASH = "abcdefghij"


@pytest.fixture(autouse=True)
def _no_port_env(monkeypatch):
    monkeypatch.delenv("PORT", raising=False)


@pytest.fixture
def project_dir(tmp_path):
    return tmp_path


@pytest.fixture
def data_dir(project_dir):
    return project_dir / "data"


@pytest.fixture
def client(project_dir):
    """Client over a file-backed app in a fresh project directory."""
    with TestClient(create_app(str(project_dir))) as c:
        yield c


@pytest.fixture
def memory_app(project_dir):
    return create_app(
        str(project_dir),
        content_store=MemoryContentStore(),
        credential_store=MemoryCredentialStore(),
        avatar_store=MemoryAvatarStore(),
    )


@pytest.fixture
def memory_client(memory_app):
    with TestClient(memory_app) as c:
        yield c


@pytest.fixture
def auth_headers(client):
    """Configure the password on `client` and return a valid bearer header."""
    assert client.post("/api/auth/setup", json={"passwordHash": PASSWORD_HASH}).status_code == 200
    return {"Authorization": f"Bearer {PASSWORD_HASH}"}
