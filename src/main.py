"""
ASGI entry point: ``uvicorn src.main:app``.
"""

from src.api.app import create_app
from src.config.logging import get_logger
from src.config.settings import settings

logger = get_logger(__name__)

app = create_app()


if __name__ == "__main__":
    import uvicorn

    logger.info("Starting dispatch server", host=settings.API_HOST, port=settings.API_PORT)

    # Requests are logged by LoggingMiddleware
    uvicorn.run(
        "src.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        log_level=settings.LOG_LEVEL.lower(),
        access_log=False,
    )
