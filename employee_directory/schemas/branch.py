"""
Employee Directory API - Branch Schemas
========================================

What:  The Branch response model and the per-operation validation schemas
       for /branches routes.

Schema registry (branches_schema):
    create     POST   /branches        body: name, address, phone (all required)
    update     PUT    /branches/{id}   params: id; body: any subset of the fields
    get_by_id  GET    /branches/{id}   params: id
    delete     DELETE /branches/{id}   params: id
"""

from types import MappingProxyType
from typing import Optional

from pydantic import BaseModel, Field

from employee_directory.schemas.request import RequestPart, RequestSchema


class Branch(BaseModel):
    """A branch as returned by the API."""

    id: str = Field(description="Unique identifier for the branch", examples=["wl3jQESZeHi6QNDnpbJO"])
    name: str = Field(description="Name of the branch", examples=["Winnipeg Branch"])
    address: str = Field(description="Branch address", examples=["1300 Joe St, Winnipeg, MB, R2X 4M5"])
    phone: str = Field(description="Branch phone number", examples=["204-456-0022"])


# ── Request parts ─────────────────────────────────────────────────────────

class CreateBranchBody(RequestPart):
    name: str = Field(min_length=1, description="Name of the branch")
    address: str = Field(min_length=1, description="Branch address")
    phone: str = Field(min_length=1, description="Branch phone number")

    messages = {
        "name": {"required": "Name is required", "empty": "Name cannot be empty"},
        "address": {"required": "Address is required", "empty": "Address cannot be empty"},
        "phone": {"required": "Phone is required", "empty": "Phone number cannot be empty"},
    }


class UpdateBranchBody(RequestPart):
    name: Optional[str] = Field(default=None, min_length=1, description="New branch name")
    address: Optional[str] = Field(default=None, min_length=1, description="New branch address")
    phone: Optional[str] = Field(default=None, min_length=1, description="New branch phone number")

    messages = {
        "name": {"empty": "Name cannot be empty"},
        "address": {"empty": "Address cannot be empty"},
        "phone": {"empty": "Phone number cannot be empty"},
    }


class BranchIdParams(RequestPart):
    id: str = Field(min_length=1, description="Branch ID")

    messages = {
        "id": {"required": "Branch ID is required", "empty": "Branch ID cannot be empty"},
    }


branches_schema = MappingProxyType(
    {
        "create": RequestSchema(body=CreateBranchBody),
        "update": RequestSchema(params=BranchIdParams, body=UpdateBranchBody),
        "get_by_id": RequestSchema(params=BranchIdParams),
        "delete": RequestSchema(params=BranchIdParams),
    }
)
