"""
API-facing models for Taskboard.

- io: Pydantic request/response schemas, kept separate from database entities
"""
