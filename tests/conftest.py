import pytest

from hearts_vault import create_app
from hearts_vault.config import TestConfig
from hearts_vault.extensions import db
from hearts_vault.models.stat import Stat

ORIGIN = TestConfig.ALLOWED_ORIGIN


@pytest.fixture
def app():
    app = create_app(TestConfig)
    with app.app_context():
        db.create_all()
        db.session.add(Stat(key=app.config["STATS_COUNTER_KEY"], value=0))
        db.session.commit()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def valid_body():
    return {
        "name": "Alice",
        "crush": "Bob",
        "result": "Love",
        "client": {
            "device": "desktop",
            "screen": "1920x1080",
            "language": "en-US",
            "browser": "Firefox",
            "os": "Linux",
        },
        "session": {
            "sessionId": "sess_123",
            "referrer": "https://example.org/",
            "page": "/index.html",
        },
    }


@pytest.fixture
def post_submit(client):
    def _post(body, origin=ORIGIN, headers=None, **kwargs):
        all_headers = {"Origin": origin} if origin else {}
        all_headers.update(headers or {})
        return client.post("/submit", json=body, headers=all_headers, **kwargs)
    return _post
