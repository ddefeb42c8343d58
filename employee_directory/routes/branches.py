"""
Employee Directory API - Branch Route Handlers
===============================================

What:  CRUD endpoints for branches under {API_PREFIX}/branches.
How:   Each handler gets its request validated by the route's schema
       (branches_schema[...]), calls BranchService, and wraps the result in a
       success envelope. Failures propagate to the exception handlers in main.py.

Route Inventory:
    GET    /branches        list all branches
    GET    /branches/{id}   get one branch
    POST   /branches        create a branch            (201)
    PUT    /branches/{id}   update supplied fields only
    DELETE /branches/{id}   delete a branch
"""

from typing import List

from fastapi import APIRouter, Depends

from employee_directory.dependencies import bearer_scheme, get_branch_service
from employee_directory.middleware.validate import ValidatedRequest, validate_request
from employee_directory.schemas.branch import Branch, branches_schema
from employee_directory.schemas.envelope import (
    ERROR_RESPONSES,
    SuccessEnvelope,
    success_response,
)
from employee_directory.services.branch_service import BranchService

router = APIRouter(
    prefix="/branches",
    tags=["Branches"],
    dependencies=[Depends(bearer_scheme)],
    responses={503: ERROR_RESPONSES[503], 504: ERROR_RESPONSES[504]},
)


@router.get(
    "",
    response_model=SuccessEnvelope[List[Branch]],
    response_model_exclude_none=True,
    summary="Retrieve a list of branches",
)
async def get_all_branches(
    service: BranchService = Depends(get_branch_service),
) -> SuccessEnvelope:
    branches = await service.get_all_branches()
    return success_response(message="Branch list returned successfully.", data=branches)


@router.get(
    "/{id}",
    response_model=SuccessEnvelope[Branch],
    response_model_exclude_none=True,
    responses={400: ERROR_RESPONSES[400], 404: ERROR_RESPONSES[404]},
    summary="Retrieve a branch by ID",
    openapi_extra=branches_schema["get_by_id"].openapi_extra(),
)
async def get_branch_by_id(
    validated: ValidatedRequest = Depends(validate_request(branches_schema["get_by_id"])),
    service: BranchService = Depends(get_branch_service),
) -> SuccessEnvelope:
    branch = await service.get_branch_by_id(validated.params.id)
    return success_response(message="Branch retrieved successfully.", data=branch)


@router.post(
    "",
    status_code=201,
    response_model=SuccessEnvelope[Branch],
    response_model_exclude_none=True,
    responses={400: ERROR_RESPONSES[400]},
    summary="Create a new branch",
    openapi_extra=branches_schema["create"].openapi_extra(),
)
async def create_branch(
    validated: ValidatedRequest = Depends(validate_request(branches_schema["create"])),
    service: BranchService = Depends(get_branch_service),
) -> SuccessEnvelope:
    branch = await service.create_branch(validated.body)
    return success_response(message="Branch has been created successfully", data=branch)


@router.put(
    "/{id}",
    response_model=SuccessEnvelope[Branch],
    response_model_exclude_none=True,
    responses={400: ERROR_RESPONSES[400], 404: ERROR_RESPONSES[404]},
    summary="Update an existing branch",
    description="Only the fields present in the body are changed; the rest keep their values.",
    openapi_extra=branches_schema["update"].openapi_extra(),
)
async def update_branch(
    validated: ValidatedRequest = Depends(validate_request(branches_schema["update"])),
    service: BranchService = Depends(get_branch_service),
) -> SuccessEnvelope:
    branch = await service.update_branch(validated.params.id, validated.body)
    return success_response(message="Branch information updated successfully.", data=branch)


@router.delete(
    "/{id}",
    response_model=SuccessEnvelope[Branch],
    response_model_exclude_none=True,
    responses={400: ERROR_RESPONSES[400], 404: ERROR_RESPONSES[404]},
    summary="Delete a branch",
    openapi_extra=branches_schema["delete"].openapi_extra(),
)
async def delete_branch(
    validated: ValidatedRequest = Depends(validate_request(branches_schema["delete"])),
    service: BranchService = Depends(get_branch_service),
) -> SuccessEnvelope:
    await service.delete_branch(validated.params.id)
    return success_response(message="Branch deleted successfully")
