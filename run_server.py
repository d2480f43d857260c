import uvicorn

from app.config import settings
from utils.logging_utils import get_tagged_logger, setup_logging

logger = get_tagged_logger(__name__, tag="server")


def check_api_keys() -> None:
    """Fail fast, before uvicorn starts, when provider API keys are missing."""
    missing = settings.missing_api_keys()
    if missing:
        logger.error(f"Cannot start: set {', '.join(missing)} in the environment or .env")
        raise SystemExit(1)


if __name__ == "__main__":
    setup_logging(level=settings.log_level)
    check_api_keys()

    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=settings.port,
        reload=False,
    )
