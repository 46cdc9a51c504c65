import logging

import uvicorn

from payonerupee.config import Settings
from payonerupee.main import configure_logging, create_app

logger = logging.getLogger("payonerupee")


def main():
    settings = Settings.from_env()
    configure_logging(settings.log_level)
    logger.info("backend running on http://localhost:%d", settings.port)
    uvicorn.run(create_app(settings), host="0.0.0.0", port=settings.port,
                log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
