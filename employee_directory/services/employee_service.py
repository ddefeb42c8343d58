"""
Employee Directory API - Employee Service
==========================================

What:  Business logic for employees: CRUD plus the two derived filters.
How:   Same policies as BranchService, over the "employees" collection.
Who:   Called by the /employee route handlers.

Derived filters:
    get_employees_for_branch(branch_id)         exact match on branchId
    get_employees_by_department(department)     case-insensitive match on department

    Both load the whole collection and filter in process. With
    EMPTY_FILTER_RAISES_NOT_FOUND=true (default) no matches raises
    NotFoundError; with false an empty list is returned.
"""

import logging
from typing import List, Optional

from employee_directory.config import settings
from employee_directory.exceptions import NotFoundError
from employee_directory.repositories.base import DocumentRepository, StoredDocument
from employee_directory.schemas.employee import (
    CreateEmployeeBody,
    Employee,
    UpdateEmployeeBody,
)
from employee_directory.services.merge import apply_partial_update

logger = logging.getLogger(__name__)


class EmployeeService:
    """Employee CRUD and filters; the empty-filter policy is fixed per instance."""

    COLLECTION = "employees"

    def __init__(
        self,
        repository: DocumentRepository,
        empty_filter_raises_not_found: Optional[bool] = None,
    ):
        self.repository = repository
        if empty_filter_raises_not_found is None:
            empty_filter_raises_not_found = settings.empty_filter_raises_not_found
        self.empty_filter_raises_not_found = empty_filter_raises_not_found

    @staticmethod
    def _to_employee(document: StoredDocument) -> Employee:
        return Employee.model_validate({**document.data, "id": document.id})

    @staticmethod
    def _to_data(employee: Employee) -> dict:
        return employee.model_dump(by_alias=True, exclude={"id"})

    # ── CRUD ──────────────────────────────────────────────────────────────

    async def get_all_employees(self) -> List[Employee]:
        documents = await self.repository.get_documents(self.COLLECTION)
        return [self._to_employee(document) for document in documents]

    async def get_employee_by_id(self, employee_id: str) -> Employee:
        document = await self.repository.get_document_by_id(self.COLLECTION, employee_id)
        if document is None or not document.exists:
            raise NotFoundError(resource="Employee", resource_id=employee_id)
        return self._to_employee(document)

    async def create_employee(self, payload: CreateEmployeeBody) -> Employee:
        data = payload.model_dump(by_alias=True)
        employee_id = await self.repository.create_document(self.COLLECTION, data)
        logger.info("Employee created: %s (branch %s)", employee_id, payload.branch_id)
        return Employee.model_validate({**data, "id": employee_id})

    async def update_employee(self, employee_id: str, payload: UpdateEmployeeBody) -> Employee:
        existing = await self.get_employee_by_id(employee_id)
        updated = apply_partial_update(existing, payload)
        await self.repository.update_document(self.COLLECTION, employee_id, self._to_data(updated))
        logger.info("Employee updated: %s", employee_id)
        return updated

    async def delete_employee(self, employee_id: str) -> None:
        await self.get_employee_by_id(employee_id)
        await self.repository.delete_document(self.COLLECTION, employee_id)
        logger.info("Employee deleted: %s", employee_id)

    # ── Derived filters ───────────────────────────────────────────────────

    async def get_employees_for_branch(self, branch_id: str) -> List[Employee]:
        employees = await self.get_all_employees()
        found = [employee for employee in employees if employee.branch_id == branch_id]
        if not found and self.empty_filter_raises_not_found:
            raise NotFoundError(
                resource="Employee",
                message=f"No employees found for branch ID {branch_id}.",
                context={"branch_id": branch_id},
            )
        return found

    async def get_employees_by_department(self, department_name: str) -> List[Employee]:
        wanted = department_name.casefold()
        employees = await self.get_all_employees()
        found = [employee for employee in employees if employee.department.casefold() == wanted]
        if not found and self.empty_filter_raises_not_found:
            raise NotFoundError(
                resource="Employee",
                message=f"No employees found in department '{department_name}'.",
                context={"department": department_name},
            )
        return found
