from flask import jsonify, current_app, request
from werkzeug.exceptions import HTTPException

NOT_FOUND = "Not found"
INTERNAL_ERROR = "Internal server error"


def _payload(message: str, status=400):
    return jsonify({"success": False, "error": message}), status


def register_error_handlers(app):
    # Unmatched routes and wrong methods are both reported as 404
    @app.errorhandler(404)
    @app.errorhandler(405)
    def handle_not_found(_):
        return _payload(NOT_FOUND, status=404)

    @app.errorhandler(HTTPException)
    def handle_http_exception(e: HTTPException):
        if (e.code or 500) >= 500:
            return _payload(INTERNAL_ERROR, status=e.code or 500)
        desc = e.description if isinstance(e.description, str) else e.name
        return _payload(desc, status=e.code or 400)

    @app.errorhandler(Exception)
    def handle_exception(e):
        # Don't leak internals
        current_app.logger.exception("Unhandled exception path=%s", request.path)
        return _payload(INTERNAL_ERROR, status=500)
