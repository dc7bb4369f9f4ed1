import pytest

from app import create_app


@pytest.fixture
def app(tmp_path):
    return create_app({
        "DATABASE_URL": f"sqlite:///{tmp_path / 'done.db'}",
        "JWT_SECRET": "test-secret",
    })


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def executor(app):
    return app.extensions["query_executor"]


@pytest.fixture
def make_user(client):
    """Register a user and return Authorization headers for them."""
    def _make(username, password="secret1"):
        resp = client.post("/user", json={"username": username, "password": password})
        assert resp.status_code == 201
        resp = client.post("/user/login", json={"username": username, "password": password})
        assert resp.status_code == 200
        return {"Authorization": f"Bearer {resp.get_json()['token']}"}

    return _make


@pytest.fixture
def alice(make_user):
    return make_user("alice")


@pytest.fixture
def bob(make_user):
    return make_user("bob")


@pytest.fixture
def alice_project(client, alice):
    resp = client.post("/project/alice", json={"title": "Home", "color": "#ff0000"}, headers=alice)
    assert resp.status_code == 201
    return resp.get_json()["p_id"]
