import hashlib
import hmac
import re

from sqlalchemy.exc import SQLAlchemyError

from hearts_vault import create_app
from hearts_vault.config import TestConfig
from hearts_vault.extensions import db
from hearts_vault.models.stat import Stat
from hearts_vault.models.submission import Submission

ISO_UTC = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z$")


def _counter(app):
    return Stat.get_value(app.config["STATS_COUNTER_KEY"])


def test_successful_submission(app, post_submit, valid_body):
    resp = post_submit(valid_body, headers={
        "CF-Connecting-IP": "203.0.113.7",
        "CF-IPCountry": "NL",
        "CF-IPCity": "Amsterdam",
    })

    assert resp.status_code == 200
    data = resp.get_json()
    assert data["success"] is True
    assert data["submissionId"].startswith("evt_")
    assert ISO_UTC.match(data["timestamp"])

    assert Submission.query.count() == 1
    assert _counter(app) == 1

    row = db.session.get(Submission, data["submissionId"])
    assert row.timestamp == data["timestamp"]
    assert row.user_name == "Alice"
    assert row.crush_name == "Bob"
    assert row.result == "Love"
    assert row.device == "desktop"
    assert row.screen == "1920x1080"
    assert row.language == "en-US"
    assert row.browser == "Firefox"
    assert row.os == "Linux"
    assert row.country == "NL"
    assert row.city == "Amsterdam"
    assert row.ip_hash == hashlib.sha256(b"203.0.113.7").hexdigest()
    assert row.session_id == "sess_123"
    assert row.referrer == "https://example.org/"
    assert row.page == "/index.html"


def test_names_are_stored_trimmed(app, post_submit):
    resp = post_submit({"name": "  Alice ", "crush": "\tBob\n", "result": "Love"})
    assert resp.status_code == 200
    row = db.session.get(Submission, resp.get_json()["submissionId"])
    assert (row.user_name, row.crush_name) == ("Alice", "Bob")


def test_optional_fields_default(app, post_submit):
    resp = post_submit({"name": "Alice", "crush": "Bob", "result": "Friends", "client": {"device": ""}})
    assert resp.status_code == 200

    row = db.session.get(Submission, resp.get_json()["submissionId"])
    assert row.device is None
    assert row.browser is None
    assert row.session_id is None
    assert row.referrer is None
    assert row.page == "/"
    assert row.country == "unknown"
    assert row.city == "unknown"
    # test client peer address stands in when the platform header is absent
    assert row.ip_hash == hashlib.sha256(b"127.0.0.1").hexdigest()


def test_ip_hash_uses_salt_when_configured(app, post_submit, valid_body):
    app.config["IP_HASH_SALT"] = "pepper"
    resp = post_submit(valid_body, headers={"CF-Connecting-IP": "198.51.100.1"})

    row = db.session.get(Submission, resp.get_json()["submissionId"])
    expected = hmac.new(b"pepper", b"198.51.100.1", hashlib.sha256).hexdigest()
    assert row.ip_hash == expected


def test_each_submission_increments_counter_once(app, post_submit, valid_body):
    ids = {post_submit(valid_body).get_json()["submissionId"] for _ in range(3)}
    assert len(ids) == 3
    assert Submission.query.count() == 3
    assert _counter(app) == 3


def test_counter_row_created_when_missing(app, post_submit, valid_body):
    db.session.delete(db.session.get(Stat, app.config["STATS_COUNTER_KEY"]))
    db.session.commit()

    assert post_submit(valid_body).status_code == 200
    assert _counter(app) == 1


def test_name_too_long_is_rejected(app, post_submit, valid_body):
    valid_body["name"] = "a" * 201
    resp = post_submit(valid_body)

    assert resp.status_code == 400
    assert resp.get_json() == {"success": False, "error": "Name exceeds 200 characters"}
    assert resp.headers["Access-Control-Allow-Origin"] == "https://hearts.example.com"
    assert Submission.query.count() == 0
    assert _counter(app) == 0


def test_unknown_result_is_rejected(app, post_submit, valid_body):
    valid_body["result"] = "Hatred"
    resp = post_submit(valid_body)

    assert resp.status_code == 400
    assert resp.get_json()["success"] is False
    assert "Invalid result" in resp.get_json()["error"]
    assert Submission.query.count() == 0


def test_result_verification_when_enabled(app, post_submit):
    app.config["VERIFY_FLAMES_RESULT"] = True
    resp = post_submit({"name": "Steve", "crush": "Alice", "result": "Enemies"})
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "Result does not match the submitted names"

    assert post_submit({"name": "Steve", "crush": "Alice", "result": "Love"}).status_code == 200


def test_disallowed_origin_is_forbidden(app, post_submit, valid_body):
    resp = post_submit(valid_body, origin="https://evil.example.com")

    assert resp.status_code == 403
    assert resp.get_json() == {"success": False, "error": "Origin not allowed"}
    assert "Access-Control-Allow-Origin" not in resp.headers
    assert Submission.query.count() == 0


def test_missing_origin_is_forbidden(post_submit, valid_body):
    resp = post_submit(valid_body, origin=None)
    assert resp.status_code == 403


def test_origin_match_is_case_insensitive(post_submit, valid_body):
    resp = post_submit(valid_body, origin="HTTPS://Hearts.Example.com")
    assert resp.status_code == 200
    assert resp.headers["Access-Control-Allow-Origin"] == "HTTPS://Hearts.Example.com"


def test_malformed_json_is_internal_error(client):
    resp = client.post(
        "/submit",
        data="{not json",
        headers={"Origin": "https://hearts.example.com", "Content-Type": "application/json"},
    )
    assert resp.status_code == 500
    assert resp.get_json() == {"success": False, "error": "Internal server error"}
    assert resp.headers["Access-Control-Allow-Origin"] == "https://hearts.example.com"


def test_store_failure_is_generic_500(app, post_submit, valid_body, monkeypatch):
    def boom(*args, **kwargs):
        raise SQLAlchemyError("database is locked at /var/db/secret.sqlite")

    monkeypatch.setattr("hearts_vault.api.submissions.routes.record_submission", boom)
    resp = post_submit(valid_body)

    assert resp.status_code == 500
    assert resp.get_json() == {"success": False, "error": "Internal server error"}
    assert "secret" not in resp.get_data(as_text=True)


def test_insert_failure_skips_counter(app, post_submit, valid_body, monkeypatch):
    monkeypatch.setattr(
        "hearts_vault.services.submissions.generate_submission_id", lambda prefix="evt_": "evt_fixed"
    )
    assert post_submit(valid_body).status_code == 200

    # same primary key again: the insert fails before the counter is touched
    resp = post_submit(valid_body)

    assert resp.status_code == 500
    assert resp.get_json() == {"success": False, "error": "Internal server error"}
    assert Submission.query.count() == 1
    assert _counter(app) == 1


def test_response_carries_request_id(post_submit, valid_body):
    resp = post_submit(valid_body, headers={"X-Request-Id": "req-42"})
    assert resp.headers["X-Request-Id"] == "req-42"

    generated = post_submit(valid_body)
    assert generated.headers["X-Request-Id"]


def test_allowed_results_come_from_config(valid_body):
    class NarrowResultsConfig(TestConfig):
        ALLOWED_RESULTS = ("Friends", "Love")

    app = create_app(NarrowResultsConfig)
    with app.app_context():
        db.create_all()
        client = app.test_client()
        headers = {"Origin": TestConfig.ALLOWED_ORIGIN}

        valid_body["result"] = "Marriage"
        resp = client.post("/submit", json=valid_body, headers=headers)
        assert resp.status_code == 400
        assert resp.get_json()["error"] == "Invalid result. Must be one of: Friends, Love"
        assert Submission.query.count() == 0

        valid_body["result"] = "Friends"
        assert client.post("/submit", json=valid_body, headers=headers).status_code == 200

        db.session.remove()
        db.drop_all()


def test_increment_upserts_unseeded_counter(app):
    key = "unseededCounter"
    Stat.increment(key)
    Stat.increment(key)
    db.session.commit()

    assert Stat.get_value(key) == 2


def test_increment_keeps_existing_value(app):
    key = app.config["STATS_COUNTER_KEY"]
    db.session.get(Stat, key).value = 41
    db.session.commit()

    Stat.increment(key)
    db.session.commit()

    assert Stat.get_value(key) == 42
