"""
Employee Directory API - Employee Route Handlers
=================================================

What:  CRUD and filter endpoints for employees under {API_PREFIX}/employee.

Route Inventory:
    GET    /employee                                  list all employees
    GET    /employee/{id}                             get one employee
    GET    /employee/branch/{branchId}                employees of a branch (exact id)
    GET    /employee/department/{departmentName}      employees of a department (any case)
    POST   /employee                                  create an employee          (201)
    PUT    /employee/{id}                             update supplied fields only
    DELETE /employee/{id}                             delete an employee

`/employee/branch/...` and `/employee/department/...` have two path segments,
so they never collide with `/employee/{id}`.
"""

from typing import List

from fastapi import APIRouter, Depends

from employee_directory.dependencies import bearer_scheme, get_employee_service
from employee_directory.middleware.validate import ValidatedRequest, validate_request
from employee_directory.schemas.employee import Employee, employee_schema
from employee_directory.schemas.envelope import (
    ERROR_RESPONSES,
    SuccessEnvelope,
    success_response,
)
from employee_directory.services.employee_service import EmployeeService

router = APIRouter(
    prefix="/employee",
    tags=["Employees"],
    dependencies=[Depends(bearer_scheme)],
    responses={503: ERROR_RESPONSES[503], 504: ERROR_RESPONSES[504]},
)

_LOOKUP_ERRORS = {400: ERROR_RESPONSES[400], 404: ERROR_RESPONSES[404]}


@router.get(
    "",
    response_model=SuccessEnvelope[List[Employee]],
    response_model_exclude_none=True,
    summary="Retrieve a list of employees",
)
async def get_all_employees(
    service: EmployeeService = Depends(get_employee_service),
) -> SuccessEnvelope:
    employees = await service.get_all_employees()
    return success_response(message="Employee list returned successfully.", data=employees)


@router.get(
    "/branch/{branchId}",
    response_model=SuccessEnvelope[List[Employee]],
    response_model_exclude_none=True,
    responses=_LOOKUP_ERRORS,
    summary="Retrieve all employees of a branch",
    openapi_extra=employee_schema["get_by_branch"].openapi_extra(),
)
async def get_all_employees_for_a_branch(
    validated: ValidatedRequest = Depends(validate_request(employee_schema["get_by_branch"])),
    service: EmployeeService = Depends(get_employee_service),
) -> SuccessEnvelope:
    employees = await service.get_employees_for_branch(validated.params.branch_id)
    return success_response(message="Employees for branch retrieved successfully.", data=employees)


@router.get(
    "/department/{departmentName}",
    response_model=SuccessEnvelope[List[Employee]],
    response_model_exclude_none=True,
    responses=_LOOKUP_ERRORS,
    summary="Retrieve all employees of a department",
    openapi_extra=employee_schema["get_by_department"].openapi_extra(),
)
async def get_employees_by_department(
    validated: ValidatedRequest = Depends(validate_request(employee_schema["get_by_department"])),
    service: EmployeeService = Depends(get_employee_service),
) -> SuccessEnvelope:
    employees = await service.get_employees_by_department(validated.params.department_name)
    return success_response(message="Employees in department retrieved successfully.", data=employees)


@router.get(
    "/{id}",
    response_model=SuccessEnvelope[Employee],
    response_model_exclude_none=True,
    responses=_LOOKUP_ERRORS,
    summary="Retrieve an employee by ID",
    openapi_extra=employee_schema["get_by_id"].openapi_extra(),
)
async def get_employee_by_id(
    validated: ValidatedRequest = Depends(validate_request(employee_schema["get_by_id"])),
    service: EmployeeService = Depends(get_employee_service),
) -> SuccessEnvelope:
    employee = await service.get_employee_by_id(validated.params.id)
    return success_response(message="Employee retrieved successfully.", data=employee)


@router.post(
    "",
    status_code=201,
    response_model=SuccessEnvelope[Employee],
    response_model_exclude_none=True,
    responses={400: ERROR_RESPONSES[400]},
    summary="Create a new employee",
    openapi_extra=employee_schema["create"].openapi_extra(),
)
async def create_employee(
    validated: ValidatedRequest = Depends(validate_request(employee_schema["create"])),
    service: EmployeeService = Depends(get_employee_service),
) -> SuccessEnvelope:
    employee = await service.create_employee(validated.body)
    return success_response(message="Employee has been created successfully", data=employee)


@router.put(
    "/{id}",
    response_model=SuccessEnvelope[Employee],
    response_model_exclude_none=True,
    responses=_LOOKUP_ERRORS,
    summary="Update an existing employee",
    description="Only the fields present in the body are changed; the rest keep their values.",
    openapi_extra=employee_schema["update"].openapi_extra(),
)
async def update_employee(
    validated: ValidatedRequest = Depends(validate_request(employee_schema["update"])),
    service: EmployeeService = Depends(get_employee_service),
) -> SuccessEnvelope:
    employee = await service.update_employee(validated.params.id, validated.body)
    return success_response(message="Employee information updated successfully.", data=employee)


@router.delete(
    "/{id}",
    response_model=SuccessEnvelope[Employee],
    response_model_exclude_none=True,
    responses=_LOOKUP_ERRORS,
    summary="Delete an employee",
    openapi_extra=employee_schema["delete"].openapi_extra(),
)
async def delete_employee(
    validated: ValidatedRequest = Depends(validate_request(employee_schema["delete"])),
    service: EmployeeService = Depends(get_employee_service),
) -> SuccessEnvelope:
    await service.delete_employee(validated.params.id)
    return success_response(message="Employee deleted successfully")
