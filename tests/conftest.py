import os
import tempfile

import pytest
from fastapi.testclient import TestClient

# must be set before the app (and its engine) is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("STORAGE_DIR", tempfile.mkdtemp(prefix="gripe-blobs-"))
for _key in ("DB_HOST", "DB_USER", "DB_PWD", "DB_NAME", "ADMIN_EMAIL", "ADMIN_PASSWORD"):
    os.environ.pop(_key, None)

from gripe_logger.client.storage.blob import blob_storage
from gripe_logger.db.session import Base, engine
from gripe_logger.main import app
from gripe_logger.model.auth.role import Role
from gripe_logger.service.auth.auth import grant_role, resolve_token, sign_in, sign_up


@pytest.fixture(autouse=True)
def fresh_store(tmp_path, monkeypatch):
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    monkeypatch.setattr(blob_storage, "root", tmp_path.resolve())
    yield
    Base.metadata.drop_all(bind=engine)


#scope : function < class < module < package < session
@pytest.fixture(scope="function")
def client():
    return TestClient(app)


def register(email: str, name: str, role: Role = Role.STUDENT) -> dict:
    profile = sign_up(email, "secret-pass", name)
    if role != Role.STUDENT:
        grant_role(profile.id, role)
    token = sign_in(email, "secret-pass").access_token
    return {
        "identity": resolve_token(token),
        "token": token,
        "headers": {"Authorization": f"Bearer {token}"},
    }


@pytest.fixture
def student():
    return register("sam@example.edu", "Sam Student")


@pytest.fixture
def other_student():
    return register("olive@example.edu", "Olive Other")


@pytest.fixture
def admin():
    return register("ada@example.edu", "Ada Admin", Role.ADMIN)


@pytest.fixture
def make_user():
    return register
