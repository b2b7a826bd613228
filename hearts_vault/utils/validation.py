from typing import Any, Dict, Iterable, Optional, Tuple
from marshmallow import ValidationError

from ..schemas.submission import SubmissionSchema
from ..services.flames import FLAMES_RESULTS, compute

submission_schema = SubmissionSchema()

MISSING_FIELDS_ERROR = "Missing required fields: name, crush, result"


def _first_error(messages, prefix: str = "") -> Tuple[str, str]:
    """Flatten marshmallow's nested error dict down to its first (field, message)."""
    if isinstance(messages, dict):
        key, value = next(iter(messages.items()))
        field = prefix if key == "_schema" else (f"{prefix}.{key}" if prefix else str(key))
        return _first_error(value, field)
    if isinstance(messages, list) and messages:
        return prefix, str(messages[0])
    return prefix, str(messages)


def validate_submission(
    data: Any,
    max_name_length: int = 200,
    allowed_results: Iterable[str] = FLAMES_RESULTS,
    verify_result: bool = False,
) -> Dict[str, Any]:
    """
    Pure validation of a submission body, no I/O.

    Returns {"valid": True, "data": <loaded body>} or
    {"valid": False, "error": <message for the first rule that failed>}.
    """
    if not isinstance(data, dict):
        return {"valid": False, "error": MISSING_FIELDS_ERROR}

    try:
        payload = submission_schema.load(data)
    except ValidationError as err:
        field, message = _first_error(err.messages)
        return {"valid": False, "error": f"Invalid field '{field}': {message}"}

    name: Optional[str] = payload.get("name")
    crush: Optional[str] = payload.get("crush")
    result: Optional[str] = payload.get("result")

    if not name or not crush or not result:
        return {"valid": False, "error": MISSING_FIELDS_ERROR}

    if len(name) > max_name_length:
        return {"valid": False, "error": f"Name exceeds {max_name_length} characters"}
    if len(crush) > max_name_length:
        return {"valid": False, "error": f"Crush name exceeds {max_name_length} characters"}

    if not name.strip():
        return {"valid": False, "error": "Name cannot be empty"}
    if not crush.strip():
        return {"valid": False, "error": "Crush name cannot be empty"}

    allowed = list(allowed_results)
    if result not in allowed:
        return {"valid": False, "error": f"Invalid result. Must be one of: {', '.join(allowed)}"}

    if verify_result and compute(name, crush) != result:
        return {"valid": False, "error": "Result does not match the submitted names"}

    return {"valid": True, "data": payload}
