"""
Run the API server. From project root:

  python -m ebookshare

HOST, PORT, LOG_LEVEL and the rest of the settings come from the environment or .env.
"""

import logging
import sys

from dotenv import load_dotenv

load_dotenv()

import uvicorn

from ebookshare.core.config import get_settings
from ebookshare.main import create_app


def main() -> int:
    settings = get_settings()
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%SZ",
    )
    logging.getLogger(__name__).info(
        "Starting eBookShare API on %s:%s (env=%s)", settings.HOST, settings.PORT, settings.APP_ENV
    )
    uvicorn.run(create_app(settings), host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())
    return 0


if __name__ == "__main__":
    sys.exit(main())
