#!/usr/bin/env python3
"""
Startup script for the Goal Tracker Backend
Serves main:app with uvicorn using the SERVER and LOGGING settings
"""

import logging

import uvicorn

from app.config.settings import app_config

logger = logging.getLogger("start_server")


def uvicorn_options() -> dict:
    server = app_config.SERVER
    return {
        "host": server['host'],
        "port": server['port'],
        "reload": server['reload'],
        "log_level": app_config.LOGGING['level'].lower(),
    }


def main():
    logging.basicConfig(level=app_config.LOGGING['level'])
    options = uvicorn_options()
    logger.info(
        f"Starting Goal Tracker Backend on {options['host']}:{options['port']} "
        f"(reload={options['reload']}, database={'sqlite' if app_config.is_sqlite() else 'external'})"
    )
    uvicorn.run("main:app", **options)


if __name__ == "__main__":
    main()
