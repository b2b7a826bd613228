from .services.flames import FLAMES_RESULTS


def swagger_template(app=None):
    title = "Hearts Vault API"
    version = "1.0.0"

    if app:
        title = app.config.get("SWAGGER_TITLE", title)
        version = app.config.get("SWAGGER_VERSION", version)

    nullable_str = {"type": "string", "x-nullable": True}

    return {
        "swagger": "2.0",
        "info": {"title": title, "version": version},
        "definitions": {
            "SubmissionRequest": {
                "type": "object",
                "required": ["name", "crush", "result"],
                "properties": {
                    "name": {"type": "string", "maxLength": 200, "example": "Alice"},
                    "crush": {"type": "string", "maxLength": 200, "example": "Bob"},
                    "result": {"type": "string", "enum": list(FLAMES_RESULTS), "example": "Love"},
                    "client": {
                        "type": "object",
                        "properties": {
                            "device": nullable_str,
                            "screen": nullable_str,
                            "language": nullable_str,
                            "browser": nullable_str,
                            "os": nullable_str,
                        },
                    },
                    "session": {
                        "type": "object",
                        "properties": {
                            "sessionId": nullable_str,
                            "referrer": nullable_str,
                            "page": nullable_str,
                        },
                    },
                },
            },
            "SubmissionReceipt": {
                "type": "object",
                "properties": {
                    "success": {"type": "boolean", "example": True},
                    "submissionId": {"type": "string", "example": "evt_1718000000000_9f2c1a7b"},
                    "timestamp": {"type": "string", "example": "2024-06-10T06:13:20.000Z"},
                },
            },
            "ErrorResponse": {
                "type": "object",
                "properties": {
                    "success": {"type": "boolean", "example": False},
                    "error": {"type": "string", "example": "Name exceeds 200 characters"},
                },
            },
        },
    }
