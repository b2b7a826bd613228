import secrets
import time
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from ..extensions import db
from ..models.submission import Submission
from ..models.stat import Stat


def generate_submission_id(prefix: str = "evt_") -> str:
    # Millisecond clock plus a random tail so same-millisecond submissions don't collide
    return f"{prefix}{int(time.time() * 1000)}_{secrets.token_hex(4)}"


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def build_submission(
    payload: Dict[str, Any],
    ip_hash: str,
    country: Optional[str],
    city: Optional[str],
    id_prefix: str = "evt_",
) -> Submission:
    """
    Turn a validated body plus platform context into an unsaved Submission.
    Optional client/session fields fall back to None ("/" for page).
    """
    client = payload.get("client") or {}
    session = payload.get("session") or {}

    return Submission(
        id=generate_submission_id(id_prefix),
        timestamp=utc_timestamp(),
        user_name=payload["name"].strip(),
        crush_name=payload["crush"].strip(),
        result=payload["result"],
        device=client.get("device") or None,
        screen=client.get("screen") or None,
        language=client.get("language") or None,
        browser=client.get("browser") or None,
        os=client.get("os") or None,
        country=country or "unknown",
        city=city or "unknown",
        ip_hash=ip_hash,
        session_id=session.get("sessionId") or None,
        referrer=session.get("referrer") or None,
        page=session.get("page") or "/",
    )


def record_submission(submission: Submission, counter_key: str) -> Submission:
    """
    Insert the row, then bump the counter, in that order.
    The flush surfaces insert failures before the counter is touched;
    the caller handles rollback on error.
    """
    db.session.add(submission)
    db.session.flush()

    Stat.increment(counter_key)
    db.session.commit()
    return submission
