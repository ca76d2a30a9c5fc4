"""Serve the API: ``python -m batch_engine``."""

import uvicorn

from batch_engine.app.config import get_settings


def main():
    settings = get_settings()
    uvicorn.run(
        "batch_engine.app.main:app",
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
        reload=settings.debug,
    )


if __name__ == "__main__":
    main()
