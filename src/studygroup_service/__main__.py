"""
Run the API server.

Usage:
    python -m studygroup_service
"""
from uvicorn import Config, Server

from studygroup_service.config.settings import get_settings


def main() -> None:
    settings = get_settings()
    config = Config(
        app="studygroup_service.api.app:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level="debug" if settings.debug else "info",
    )
    Server(config).run()


if __name__ == "__main__":
    main()
