"""
Employee Directory API - FastAPI Dependencies
==============================================

What:  Dependency providers injected into route handlers.
How:   The repository lives on `app.state.repository` (set by create_app or the
       lifespan handler); services are built per request around it.

    get_repository      → DocumentRepository of the running app
    get_branch_service  → BranchService(repository)
    get_employee_service→ EmployeeService(repository, app settings' empty-filter policy)
    bearer_scheme       → declares bearerAuth in OpenAPI; tokens are NOT checked
"""

from fastapi import Depends, Request
from fastapi.security import HTTPBearer

from employee_directory.config import settings
from employee_directory.repositories.base import DocumentRepository
from employee_directory.services.branch_service import BranchService
from employee_directory.services.employee_service import EmployeeService

# auto_error=False: requests without an Authorization header are accepted.
bearer_scheme = HTTPBearer(
    auto_error=False,
    scheme_name="bearerAuth",
    bearerFormat="JWT",
    description="JWT bearer token (declared for clients; not enforced by this service)",
)


def get_repository(request: Request) -> DocumentRepository:
    repository = getattr(request.app.state, "repository", None)
    if repository is None:
        raise RuntimeError("No document repository configured on the application")
    return repository


def get_branch_service(
    repository: DocumentRepository = Depends(get_repository),
) -> BranchService:
    return BranchService(repository)


def get_employee_service(
    request: Request,
    repository: DocumentRepository = Depends(get_repository),
) -> EmployeeService:
    # The empty-filter policy comes from the settings create_app() was given.
    config = getattr(request.app.state, "settings", settings)
    return EmployeeService(
        repository,
        empty_filter_raises_not_found=config.empty_filter_raises_not_found,
    )
