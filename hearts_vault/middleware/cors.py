from flask import current_app, request

from ..errors import _payload


def origin_allowed(origin) -> bool:
    allowed = current_app.config.get("ALLOWED_ORIGIN") or ""
    return bool(origin) and origin.lower() == allowed.lower()


def cors_headers(origin) -> dict:
    """CORS headers for a permitted origin, empty for everyone else."""
    if not origin_allowed(origin):
        return {}
    return {
        "Access-Control-Allow-Origin": origin,
        "Access-Control-Allow-Methods": "POST, OPTIONS",
        "Access-Control-Allow-Headers": "Content-Type",
        "Access-Control-Max-Age": str(current_app.config.get("CORS_MAX_AGE", 86400)),
    }


def init_cors(app):
    @app.before_request
    def _handle_preflight():
        if request.method != "OPTIONS":
            return None

        origin = request.headers.get("Origin")
        if not origin_allowed(origin):
            app.logger.warning("Rejected preflight origin=%s", origin)
            return _payload("Origin not allowed", status=403)

        return "", 204

    @app.after_request
    def _add_cors_headers(response):
        # Responses differ per Origin whether or not it is allowed
        response.vary.add("Origin")
        for key, value in cors_headers(request.headers.get("Origin")).items():
            response.headers[key] = value
        return response
