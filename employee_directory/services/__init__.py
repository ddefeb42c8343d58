# Services package init
"""
Employee Directory API - Services Layer
========================================

What:  Business logic between routes (HTTP) and repositories (document store).
How:   Services receive an injected DocumentRepository, apply the not-found
       and partial-update policies, and return entity models.

Service Inventory:
    - BranchService:    branch CRUD
    - EmployeeService:  employee CRUD + branch / department filters
    - merge:            apply_partial_update, shared by both services
"""
