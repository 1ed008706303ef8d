"""Run the service with uvicorn: ``python -m app``."""

import uvicorn

from app.core.config import get_settings
from app.core.logging import setup_logging


def main() -> None:
    settings = get_settings()
    setup_logging(settings.log_level)

    uvicorn.run(
        "app.main:app",
        host=settings.app_host,
        port=settings.app_port,
        log_level=settings.log_level.lower(),
        access_log=False,
    )


if __name__ == "__main__":
    main()
