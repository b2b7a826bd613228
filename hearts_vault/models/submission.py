from ..extensions import db


class Submission(db.Model):
    __tablename__ = "submissions"

    id = db.Column(db.String(64), primary_key=True)
    # ISO-8601 UTC string, assigned at receipt
    timestamp = db.Column(db.String(32), nullable=False, index=True)

    user_name = db.Column(db.String(200), nullable=False)
    crush_name = db.Column(db.String(200), nullable=False)
    result = db.Column(db.String(20), nullable=False, index=True)

    # Client-reported, unverified
    device = db.Column(db.Text, nullable=True)
    screen = db.Column(db.Text, nullable=True)
    language = db.Column(db.Text, nullable=True)
    browser = db.Column(db.Text, nullable=True)
    os = db.Column(db.Text, nullable=True)

    # Derived from the platform, never from the body
    country = db.Column(db.String(64), nullable=False, default="unknown")
    city = db.Column(db.String(128), nullable=False, default="unknown")
    ip_hash = db.Column(db.String(64), nullable=False, default="unknown")

    session_id = db.Column(db.Text, nullable=True)
    referrer = db.Column(db.Text, nullable=True)
    page = db.Column(db.Text, nullable=True)
