from marshmallow import Schema, fields, EXCLUDE


class ClientInfoSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    device = fields.Str(load_default=None, allow_none=True)
    screen = fields.Str(load_default=None, allow_none=True)
    language = fields.Str(load_default=None, allow_none=True)
    browser = fields.Str(load_default=None, allow_none=True)
    os = fields.Str(load_default=None, allow_none=True)


class SessionInfoSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    sessionId = fields.Str(load_default=None, allow_none=True)
    referrer = fields.Str(load_default=None, allow_none=True)
    page = fields.Str(load_default=None, allow_none=True)


class SubmissionSchema(Schema):
    """
    Shape and types of a POST /submit body. Business rules (required fields,
    lengths, allowed results) are applied by validate_submission so that each
    failure maps to a single readable message.
    """
    class Meta:
        unknown = EXCLUDE

    name = fields.Str(load_default=None, allow_none=True)
    crush = fields.Str(load_default=None, allow_none=True)
    result = fields.Str(load_default=None, allow_none=True)
    client = fields.Nested(ClientInfoSchema, load_default=None, allow_none=True)
    session = fields.Nested(SessionInfoSchema, load_default=None, allow_none=True)


class SubmissionReceiptSchema(Schema):
    success = fields.Bool(required=True)
    submissionId = fields.Str(required=True)
    timestamp = fields.Str(required=True)
