"""Run the Taskboard server with uvicorn: ``python -m taskboard.server`` or ``taskboard``."""

import uvicorn

from taskboard.server.core.config import settings


def main() -> None:
    uvicorn.run(
        "taskboard.server.main:app",
        host=settings.server_host,
        port=settings.server_port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
