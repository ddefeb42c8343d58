"""
Employee Directory API - Request Schema Building Blocks
========================================================

What:  The two types every entity schema module is built from.
       - RequestPart:   a pydantic model describing ONE request part
                        (body, params or query) plus its per-field messages.
       - RequestSchema: an immutable, ordered mapping part name → RequestPart
                        class, bound to a single route.
How:   The validation dependency (middleware/validate.py) walks a
       RequestSchema in declaration order, validates each part against its
       model and turns pydantic errors into the messages declared here.
When:  Schemas are created at import time and never mutated afterwards.

Message keys (per field, in `RequestPart.messages`):
    required  field is missing
    empty     field is an empty string
    string    field is not a string
    number    field is not a number
    format    field failed a format check (e.g. email)
    unknown   field is not declared by the schema
"""

from types import MappingProxyType
from typing import Any, ClassVar, Dict, List, Mapping, Type

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic_core import PydanticCustomError


class RequestPart(BaseModel):
    """
    Base model for one validated request part.

    Subclasses declare fields in the order their messages must be reported.
    Undeclared keys are rejected, and so are Python attribute names of
    aliased fields: `branch_id` is unknown, only `branchId` is accepted.
    Optional fields may be omitted but never sent as null.
    """

    model_config = ConfigDict(extra="forbid")

    # field name as sent by the client (alias) → message key → message
    messages: ClassVar[Dict[str, Dict[str, str]]] = {}

    @field_validator("*", mode="before")
    @classmethod
    def reject_null(cls, value: Any) -> Any:
        # Defaults are not validated, so only an explicit null reaches here.
        if value is None:
            raise PydanticCustomError("string_type", "Input should be a valid string")
        return value


class RequestSchema:
    """
    Per-route validation schema.

    Usage:
        RequestSchema(params=EmployeeIdParams, body=UpdateEmployeeBody)

    Keyword order is the order parts are validated and reported in.
    A schema with no parts accepts every request.
    """

    PARTS = ("body", "params", "query")

    def __init__(self, **parts: Type[RequestPart]):
        unknown = [name for name in parts if name not in self.PARTS]
        if unknown:
            raise ValueError(f"Unknown request part(s) {unknown}; expected one of {self.PARTS}")
        self._parts: Mapping[str, Type[RequestPart]] = MappingProxyType(dict(parts))

    @property
    def parts(self) -> Mapping[str, Type[RequestPart]]:
        return self._parts

    def __repr__(self) -> str:
        inner = ", ".join(f"{name}={model.__name__}" for name, model in self._parts.items())
        return f"RequestSchema({inner})"

    def openapi_extra(self) -> Dict[str, Any]:
        """
        OpenAPI fragments for this schema's parts.

        Routes do not declare path/body parameters themselves (the schema is the
        single source of truth), so the request body and parameters are
        documented from the part models instead.
        """
        extra: Dict[str, Any] = {}
        parameters: List[Dict[str, Any]] = []

        for part, location in (("params", "path"), ("query", "query")):
            model = self._parts.get(part)
            if model is None:
                continue
            schema = model.model_json_schema(by_alias=True)
            required = set(schema.get("required", []))
            for name, prop in schema.get("properties", {}).items():
                parameters.append(
                    {
                        "name": name,
                        "in": location,
                        "required": location == "path" or name in required,
                        "description": prop.get("description", ""),
                        "schema": {"type": prop.get("type", "string")},
                    }
                )
        if parameters:
            extra["parameters"] = parameters

        body = self._parts.get("body")
        if body is not None:
            extra["requestBody"] = {
                "required": True,
                "content": {
                    "application/json": {"schema": body.model_json_schema(by_alias=True)}
                },
            }
        return extra
