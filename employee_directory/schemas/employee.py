"""
Employee Directory API - Employee Schemas
==========================================

What:  The Employee response model and the per-operation validation schemas
       for /employee routes.

Schema registry (employee_schema):
    create            POST   /employee                          body: all six fields
    update            PUT    /employee/{id}                     params: id; body: any subset
    get_by_id         GET    /employee/{id}                     params: id
    delete            DELETE /employee/{id}                     params: id
    get_by_branch     GET    /employee/branch/{branchId}        params: branchId
    get_by_department GET    /employee/department/{departmentName}  params: departmentName

`branchId` is a plain string reference; the branch is not looked up on write.
"""

from types import MappingProxyType
from typing import Annotated, Optional

from email_validator import EmailNotValidError, validate_email
from pydantic import AfterValidator, BaseModel, ConfigDict, Field

from employee_directory.schemas.request import RequestPart, RequestSchema


def _check_email(value: str) -> str:
    """Reject malformed addresses and display-name forms; the client's string is kept as sent."""
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError as e:
        raise ValueError(str(e)) from e
    return value


EmailAddress = Annotated[str, AfterValidator(_check_email)]


class Employee(BaseModel):
    """An employee as returned by the API (JSON uses `branchId`)."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(description="Unique identifier for the employee", examples=["Xy8Pq2LmN4rT6vWz0aBc"])
    name: str = Field(description="Full name", examples=["Alice Johnson"])
    position: str = Field(description="Job title", examples=["Branch Manager"])
    department: str = Field(description="Department name", examples=["Management"])
    email: str = Field(description="Work email address", examples=["alice.johnson@pixell-river.com"])
    phone: str = Field(description="Contact phone number", examples=["604-555-0148"])
    branch_id: str = Field(alias="branchId", description="ID of the branch the employee works at", examples=["1"])


# ── Request parts ─────────────────────────────────────────────────────────

class CreateEmployeeBody(RequestPart):
    name: str = Field(min_length=1, description="Full name")
    position: str = Field(min_length=1, description="Job title")
    department: str = Field(min_length=1, description="Department name")
    email: EmailAddress = Field(description="Work email address", json_schema_extra={"format": "email"})
    phone: str = Field(min_length=1, description="Contact phone number")
    branch_id: str = Field(alias="branchId", min_length=1, description="ID of the employee's branch")

    messages = {
        "name": {"required": "Name is required", "empty": "Name cannot be empty"},
        "position": {"required": "Position is required", "empty": "Position cannot be empty"},
        "department": {"required": "Department is required", "empty": "Department cannot be empty"},
        "email": {
            "required": "Email is required",
            "empty": "Email cannot be empty",
            "format": "Email must be valid",
        },
        "phone": {"required": "Phone is required", "empty": "Phone cannot be empty"},
        "branchId": {"required": "branchId is required", "empty": "BranchId cannot be empty"},
    }


class UpdateEmployeeBody(RequestPart):
    name: Optional[str] = Field(default=None, min_length=1)
    position: Optional[str] = Field(default=None, min_length=1)
    department: Optional[str] = Field(default=None, min_length=1)
    email: Optional[EmailAddress] = Field(default=None, json_schema_extra={"format": "email"})
    phone: Optional[str] = Field(default=None, min_length=1)
    branch_id: Optional[str] = Field(default=None, alias="branchId", min_length=1)

    messages = {
        "name": {"empty": "Name cannot be empty"},
        "position": {"empty": "Position cannot be empty"},
        "department": {"empty": "Department cannot be empty"},
        "email": {"empty": "Email cannot be empty", "format": "Email must be valid"},
        "phone": {"empty": "Phone cannot be empty"},
        "branchId": {"empty": "BranchId cannot be empty"},
    }


class EmployeeIdParams(RequestPart):
    id: str = Field(min_length=1, description="Employee ID")

    messages = {
        "id": {"required": "Employee ID is required", "empty": "Employee ID cannot be empty"},
    }


class BranchFilterParams(RequestPart):
    branch_id: str = Field(alias="branchId", min_length=1, description="Branch ID to filter by")

    messages = {
        "branchId": {"required": "Branch ID is required", "empty": "Branch ID cannot be empty"},
    }


class DepartmentFilterParams(RequestPart):
    department_name: str = Field(
        alias="departmentName",
        min_length=1,
        description="Department name to filter by (case-insensitive)",
    )

    messages = {
        "departmentName": {
            "required": "Department name is required",
            "empty": "Department name cannot be empty",
        },
    }


employee_schema = MappingProxyType(
    {
        "create": RequestSchema(body=CreateEmployeeBody),
        "update": RequestSchema(params=EmployeeIdParams, body=UpdateEmployeeBody),
        "get_by_id": RequestSchema(params=EmployeeIdParams),
        "delete": RequestSchema(params=EmployeeIdParams),
        "get_by_branch": RequestSchema(params=BranchFilterParams),
        "get_by_department": RequestSchema(params=DepartmentFilterParams),
    }
)
