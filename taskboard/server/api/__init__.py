"""
API route definitions.

Modules:
- auth: Registration and login
- tasks: Owner-scoped task CRUD with filtering
- dashboard: Aggregated task statistics
- bootstrap: Idempotent schema creation
- health: Liveness and version endpoints
"""
