"""
Employee Directory API - Request Validation
============================================

What:  Runs a request against the RequestSchema bound to its route.
How:   `validate_request(schema)` returns a FastAPI dependency. The dependency
       reads every declared part (body, params, query), validates each one
       against its RequestPart model, and either:
         - returns a ValidatedRequest (the route handler runs), or
         - raises ValidationError carrying every violation (the handler never
           runs; main.py renders 400 {"error": "Validation error: ..."}).
Who:   Attached to entity routes with Depends(); also used by the
       RequestValidationError handler so FastAPI's own errors read the same.
When:  Before the route handler, once per request.

Message ordering:
    Parts in schema declaration order, then fields in model declaration
    order, each message prefixed with its part name:
        "Params: Employee ID cannot be empty, Body: Email must be valid"
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Mapping, Optional, Tuple, Type

from pydantic import ValidationError as PydanticValidationError
from starlette.requests import Request

from employee_directory.exceptions import ValidationError
from employee_directory.schemas.request import RequestPart, RequestSchema

logger = logging.getLogger(__name__)

# Marker for a body that is present but not valid JSON
_MALFORMED = object()

_NUMBER_ERRORS = {
    "int_type",
    "int_parsing",
    "int_from_float",
    "float_type",
    "float_parsing",
    "decimal_type",
    "decimal_parsing",
}
_OBJECT_ERRORS = {"model_type", "model_attributes_type", "dict_type"}

_DEFAULT_MESSAGES = {
    "required": "{label} is required",
    "empty": "{label} cannot be empty",
    "string": "{label} must be a string",
    "number": "{label} must be a number",
    "format": "{label} must be valid",
    "unknown": '"{field}" is not allowed',
}


@dataclass(frozen=True)
class ValidatedRequest:
    """Parsed request parts; a part the schema does not declare stays None."""

    body: Optional[RequestPart] = None
    params: Optional[RequestPart] = None
    query: Optional[RequestPart] = None


# ══════════════════════════════════════════════════════════════════════════
# Error translation
# ══════════════════════════════════════════════════════════════════════════

def _label(field: str) -> str:
    """'branchId' → 'BranchId', 'name' → 'Name'."""
    return field[:1].upper() + field[1:]


def classify_error(error: Mapping[str, Any]) -> str:
    """Map one pydantic error dict onto a message key (see schemas/request.py)."""
    error_type = error.get("type", "")
    if error_type == "missing":
        return "required"
    if error_type == "extra_forbidden":
        return "unknown"
    if error_type in _OBJECT_ERRORS:
        return "object"
    if error.get("input") == "" or error_type == "string_too_short":
        return "empty"
    if error_type == "string_type":
        return "string"
    if error_type in _NUMBER_ERRORS:
        return "number"
    if error_type == "value_error":
        return "format"
    return "invalid"


def describe_error(model: Type[RequestPart], error: Mapping[str, Any]) -> str:
    """Human-readable message for one pydantic error, preferring the schema's own text."""
    loc = error.get("loc") or ()
    kind = classify_error(error)
    if not loc:
        if kind == "object":
            return "Value must be a JSON object"
        return str(error.get("msg", "Invalid value"))

    field = str(loc[0])
    custom = model.messages.get(field, {})
    if kind in custom:
        return custom[kind]
    template = _DEFAULT_MESSAGES.get(kind)
    if template is None:
        return f"{_label(field)}: {error.get('msg', 'invalid value')}"
    return template.format(label=_label(field), field=field)


def validate_parts(
    schema: RequestSchema,
    raw_parts: Mapping[str, Any],
) -> Tuple[ValidatedRequest, List[str]]:
    """
    Validate each declared part independently and collect every violation.

    Args:
        schema:    the route's RequestSchema
        raw_parts: part name → raw value (dict, or the malformed-JSON marker)

    Returns:
        (ValidatedRequest, messages). `messages` is empty on success; on
        failure the ValidatedRequest only holds the parts that passed.
    """
    parsed: Dict[str, RequestPart] = {}
    messages: List[str] = []

    for part, model in schema.parts.items():
        prefix = part.capitalize()
        value = raw_parts.get(part)
        if value is None:
            value = {}
        if value is _MALFORMED:
            messages.append(f"{prefix}: Malformed JSON")
            continue
        try:
            parsed[part] = model.model_validate(value)
        except PydanticValidationError as exc:
            messages.extend(
                f"{prefix}: {describe_error(model, error)}" for error in exc.errors()
            )

    return ValidatedRequest(**parsed), messages


def describe_framework_errors(errors: Iterable[Mapping[str, Any]]) -> List[str]:
    """
    Messages for FastAPI's RequestValidationError, in the same "Part: message" form.

    Used when a route declares its own typed parameters instead of a RequestSchema.
    """
    locations = {"body": "Body", "path": "Params", "query": "Query", "header": "Headers", "cookie": "Cookies"}
    messages = []
    for error in errors:
        loc = list(error.get("loc") or ())
        prefix = locations.get(str(loc[0]), "Request") if loc else "Request"
        fields = [str(item) for item in loc[1:]]
        kind = classify_error(error)
        if fields and kind in _DEFAULT_MESSAGES:
            text = _DEFAULT_MESSAGES[kind].format(label=_label(fields[0]), field=fields[0])
        elif fields:
            text = f"{_label('.'.join(fields))}: {error.get('msg', 'invalid value')}"
        else:
            text = str(error.get("msg", "Invalid request"))
        messages.append(f"{prefix}: {text}")
    return messages


# ══════════════════════════════════════════════════════════════════════════
# Request reading & the dependency
# ══════════════════════════════════════════════════════════════════════════

async def _read_body(request: Request) -> Any:
    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        return json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError):
        return _MALFORMED


async def read_request_parts(request: Request, schema: RequestSchema) -> Dict[str, Any]:
    """Collect the raw value of every part the schema declares (and only those)."""
    raw: Dict[str, Any] = {}
    for part in schema.parts:
        if part == "body":
            raw[part] = await _read_body(request)
        elif part == "params":
            raw[part] = dict(request.path_params)
        elif part == "query":
            raw[part] = dict(request.query_params)
    return raw


def validate_request(schema: RequestSchema) -> Callable[[Request], Awaitable[ValidatedRequest]]:
    """
    Build the validation dependency for one route.

    Usage:
        @router.post("", ...)
        async def create_branch(
            validated: ValidatedRequest = Depends(validate_request(branches_schema["create"])),
        ): ...

    On success the parsed parts are also stored on `request.state.validated`.
    """

    async def dependency(request: Request) -> ValidatedRequest:
        raw_parts = await read_request_parts(request, schema)
        validated, messages = validate_parts(schema, raw_parts)
        if messages:
            logger.debug(
                "Request %s %s rejected with %d violation(s)",
                request.method,
                request.url.path,
                len(messages),
            )
            raise ValidationError(
                messages,
                context={"method": request.method, "path": request.url.path},
            )
        request.state.validated = validated
        return validated

    return dependency
