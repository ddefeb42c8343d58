# Routes package init
"""
Employee Directory API - Routes Package
========================================

Route Inventory:
    - branches.py:   {API_PREFIX}/branches   (branch CRUD)
    - employees.py:  {API_PREFIX}/employee   (employee CRUD + branch/department filters)
    - health.py:     GET /health, GET /      (not prefixed)

Routes stay thin: validate via the route's schema, call one service method,
wrap the result with success_response. Errors are raised, never formatted here.
"""
