"""
Taskboard Server Package.

This package contains the web server implementation of Taskboard.

Subpackages:
    api: FastAPI route definitions and endpoint logic.
    core: Settings, constants and credential handling.
    exception_handlers: Mapping of errors to HTTP responses.
    middleware: Request logging.
    services: Request-scoped dependencies (datastore, session, principal).
"""
