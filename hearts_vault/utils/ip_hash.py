import hmac
import hashlib
from typing import Optional
from flask import current_app, request


def client_ip() -> Optional[str]:
    """Caller address from the platform header, falling back to the socket peer."""
    header = current_app.config.get("CLIENT_IP_HEADER")
    ip = request.headers.get(header) if header else None
    return (ip or request.remote_addr or "").strip() or None


def hash_ip(ip: Optional[str], salt: str = "") -> str:
    """
    One-way hex digest of an IP address for privacy-preserving storage.
    SHA-256 by default; HMAC-SHA256 keyed with `salt` when one is configured.
    """
    if not ip:
        return "unknown"

    msg = ip.encode("utf-8")
    if salt:
        return hmac.new(salt.encode("utf-8"), msg, hashlib.sha256).hexdigest()
    return hashlib.sha256(msg).hexdigest()
