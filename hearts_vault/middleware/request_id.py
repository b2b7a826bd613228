import logging
import uuid
from flask import g, has_request_context, request
from flask.logging import default_handler

LOG_FORMAT = "[%(asctime)s] %(levelname)s [%(request_id)s] in %(module)s: %(message)s"


class RequestIdFilter(logging.Filter):
    """Stamps log records with the current request id ("-" outside a request)."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = getattr(g, "request_id", "-") if has_request_context() else "-"
        return True


class RequestIdHandler(logging.StreamHandler):
    """Stream handler owned by the app logger, formatting with the request id."""

    def __init__(self, stream=None):
        super().__init__(stream)
        self.addFilter(RequestIdFilter())
        self.setFormatter(logging.Formatter(LOG_FORMAT))


def init_request_id(app):
    # Swap Flask's shared default handler for our own on this app's logger only;
    # re-created apps replace the previous RequestIdHandler instead of stacking.
    for handler in list(app.logger.handlers):
        if handler is default_handler or isinstance(handler, RequestIdHandler):
            app.logger.removeHandler(handler)
    app.logger.addHandler(RequestIdHandler())

    @app.before_request
    def _assign_request_id():
        g.request_id = request.headers.get("X-Request-Id") or str(uuid.uuid4())

    @app.after_request
    def _add_request_id_header(response):
        if hasattr(g, "request_id"):
            response.headers["X-Request-Id"] = g.request_id
        return response
