"""Taskboard.

A personal task tracking backend. Users register, log in with a bearer token,
and manage their own tasks; every read and write is scoped to the user who
owns the row.

Core subpackages
----------------

- ``taskboard.core``: logging, error taxonomy, the database layer (entities,
  repositories, the ``TaskQueryBuilder``) and the API I/O models.
- ``taskboard.server``: the FastAPI application, settings, credential gate,
  routers and exception handlers.
"""

__version__ = "1.0.0"
