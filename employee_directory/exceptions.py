"""
Employee Directory API - Custom Exception Hierarchy
====================================================

What:  Application-specific exceptions for the failure classes the API knows about.
Why:   The centralized handlers in main.py map each exception TYPE to a status
       code and response shape. Nothing downstream inspects message text.
How:   Each exception carries a user-facing message and an optional context dict.
Who:   Raised by the validation dependency, services and repository adapters.
When:  During request processing; never fatal to the process.

Exception Hierarchy:
    EmployeeDirectoryError (base)
    ├── ValidationError        → 400 Bad Request  {"error": "Validation error: ..."}
    ├── NotFoundError          → 404 Not Found    {"status": "error", "message": ...}
    └── StoreError             → 503 Service Unavailable (message masked)
        └── StoreTimeoutError  → 504 Gateway Timeout (message masked)
"""

from typing import Any, Dict, List, Optional


class EmployeeDirectoryError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(EmployeeDirectoryError):
    """
    Raised when a request violates the schema bound to its route.

    What:    One or more request parts (body, params, query) failed validation.
    HTTP:    400 Bad Request
    How:     Holds every violation message, already prefixed with its part name
             ("Body: Name cannot be empty"), in part-then-field order.

    Example response:
        {"error": "Validation error: Body: Name is required, Body: Phone is required"}
    """

    PREFIX = "Validation error: "

    def __init__(
        self,
        messages: List[str],
        context: Optional[Dict[str, Any]] = None,
    ):
        self.messages = list(messages)
        super().__init__(
            message=self.PREFIX + ", ".join(self.messages),
            context=context,
        )


class NotFoundError(EmployeeDirectoryError):
    """
    Raised when an identifier or filter resolves to nothing.

    What:    A branch/employee id does not exist, or a derived filter
             (employees of a branch, employees in a department) matched no records.
    HTTP:    404 Not Found

    Usage:
        NotFoundError(resource="Branch", resource_id="abc")
            → "Branch with ID abc does not exist"
        NotFoundError(message="No employees found in department 'Sales'.")
    """

    def __init__(
        self,
        resource: str = "Resource",
        resource_id: Optional[str] = None,
        message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        if message is None:
            if resource_id is not None:
                message = f"{resource} with ID {resource_id} does not exist"
            else:
                message = f"The requested {resource.lower()} does not exist"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource = resource
        self.resource_id = resource_id


class StoreError(EmployeeDirectoryError):
    """
    Raised when the document store fails (network, permission, backend error).

    What:    Any exception escaping a repository adapter call, wrapped.
    HTTP:    503 Service Unavailable

    Security Note:
        The message returned to the client is always generic. The backend
        exception type and text live in `context` and are logged server-side only.
    """

    def __init__(
        self,
        message: str = "The document store is temporarily unavailable. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class StoreTimeoutError(StoreError):
    """
    Raised when a repository call exceeds STORE_TIMEOUT_SECONDS.

    HTTP:    504 Gateway Timeout
    """

    def __init__(
        self,
        timeout: float,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["timeout"] = timeout
        super().__init__(
            message="The document store did not respond in time. Please try again later.",
            context=ctx,
        )
        self.timeout = timeout
