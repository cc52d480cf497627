import logging
import sys
from app.core.config import settings

def setup_logging():
    """
    Configure structured logging for the application.

    Logs go to stdout with timestamp, level and logger name, at LOG_LEVEL.
    Works the same under uvicorn, Docker and the pytest runner.
    """
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)]
    )

    # Reduce SQLAlchemy and HTTP client noise in logs
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)

    return logging.getLogger("onboarding")


# Create global logger instance
logger = setup_logging()
