#!/usr/bin/env python3
"""Run script for usersapi."""

import logging
import os
import sys

import uvicorn

from usersapi.api.app import create_app
from usersapi.config import ConfigError, configure_logging, load_settings

if __name__ == "__main__":
    try:
        settings = load_settings()
    except ConfigError as e:
        configure_logging()
        logging.getLogger("usersapi").critical(f"Invalid configuration: {e}")
        sys.exit(1)

    configure_logging(settings.log_level)
    uvicorn.run(
        create_app(settings),
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", "4000")),
        log_config=None,
    )
