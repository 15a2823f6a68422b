"""Server-wide constants."""

PROJECT_NAME = "Taskboard"
API_VERSION = "1.0.0"
SCHEMA_VERSION = "v1"
