from flask import Blueprint, request, current_app
from flasgger import swag_from
from sqlalchemy.exc import SQLAlchemyError

from ...errors import _payload, INTERNAL_ERROR
from ...extensions import db
from ...middleware.cors import origin_allowed
from ...schemas.submission import SubmissionReceiptSchema
from ...services.submissions import build_submission, record_submission
from ...utils.ip_hash import client_ip, hash_ip
from ...utils.validation import validate_submission

submissions_bp = Blueprint("submissions", __name__)
receipt_schema = SubmissionReceiptSchema()


def _geo_context():
    """Country/city as injected by the hosting platform, never by the client body."""
    cfg = current_app.config
    country = request.headers.get(cfg["GEO_COUNTRY_HEADER"]) if cfg.get("GEO_COUNTRY_HEADER") else None
    city = request.headers.get(cfg["GEO_CITY_HEADER"]) if cfg.get("GEO_CITY_HEADER") else None
    return country or "unknown", city or "unknown"


@submissions_bp.post("/submit")
@swag_from({
    "tags": ["Submissions"],
    "summary": "Record a FLAMES result",
    "description": (
        "Accepted only from the configured front-end origin.\n"
        "The caller address is stored as a one-way hash; country/city come "
        "from platform geolocation headers."
    ),
    "parameters": [{
        "in": "body",
        "name": "body",
        "required": True,
        "schema": {"$ref": "#/definitions/SubmissionRequest"},
    }],
    "responses": {
        200: {"description": "Submission recorded", "schema": {"$ref": "#/definitions/SubmissionReceipt"}},
        400: {"description": "Validation error", "schema": {"$ref": "#/definitions/ErrorResponse"}},
        403: {"description": "Origin not allowed", "schema": {"$ref": "#/definitions/ErrorResponse"}},
        500: {"description": "Server error", "schema": {"$ref": "#/definitions/ErrorResponse"}},
    },
})
def submit():
    origin = request.headers.get("Origin")
    if not origin_allowed(origin):
        current_app.logger.warning("Rejected submission origin=%s", origin)
        return _payload("Origin not allowed", status=403)

    cfg = current_app.config

    try:
        data = request.get_json(force=True)

        validation = validate_submission(
            data,
            max_name_length=cfg["MAX_NAME_LENGTH"],
            allowed_results=cfg["ALLOWED_RESULTS"],
            verify_result=cfg["VERIFY_FLAMES_RESULT"],
        )
        if not validation["valid"]:
            current_app.logger.info("Submission rejected reason=%s", validation["error"])
            return _payload(validation["error"], status=400)

        ip_hash = hash_ip(client_ip(), cfg.get("IP_HASH_SALT") or "")
        country, city = _geo_context()

        submission = build_submission(
            validation["data"],
            ip_hash=ip_hash,
            country=country,
            city=city,
            id_prefix=cfg["SUBMISSION_ID_PREFIX"],
        )
        record_submission(submission, cfg["STATS_COUNTER_KEY"])

    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("DB error while recording submission")
        return _payload(INTERNAL_ERROR, status=500)

    except Exception:
        db.session.rollback()
        current_app.logger.exception("Unexpected error while recording submission")
        return _payload(INTERNAL_ERROR, status=500)

    current_app.logger.info("Submission recorded id=%s result=%s", submission.id, submission.result)
    return receipt_schema.dump({
        "success": True,
        "submissionId": submission.id,
        "timestamp": submission.timestamp,
    }), 200
