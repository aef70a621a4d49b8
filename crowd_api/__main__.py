from __future__ import annotations

import logging

import uvicorn

from .config import get_settings
from .main import app


def main() -> None:
    settings = get_settings()
    log_level = getattr(logging, settings.log_level, logging.INFO)
    logging.basicConfig(level=log_level, format="%(asctime)s %(levelname)s %(message)s")

    logging.info("Read-only API listening on http://%s:%s", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=logging.getLevelName(log_level).lower())


if __name__ == "__main__":
    main()
