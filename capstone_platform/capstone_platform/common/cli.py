"""
Shared pieces of the service entry points.
"""
import logging
import sys
from typing import Callable

import click
import uvicorn
from fastapi import FastAPI

from .config import ServiceSettings
from .errors import ConfigurationError
from .logging_config import configure_logging

logger = logging.getLogger(__name__)


def server_options(default_port: int):
    """Options every service command takes."""
    def decorator(func):
        func = click.option("--env-file", "env_file", default=None, type=click.Path(dir_okay=False),
                            help="Environment-style file with settings")(func)
        func = click.option("--port", "port", default=default_port, type=int, show_default=True)(func)
        func = click.option("--host", "host", default="127.0.0.1", show_default=True)(func)
        func = click.option("--sql", "database_url", default=None,
                            help="Store connection string (SQLAlchemy URL)")(func)
        return func
    return decorator


def settings_overrides(database_url, host, port) -> dict:
    overrides = {"HOST": host, "PORT": port}
    if database_url:
        overrides["DATABASE_URL"] = database_url
    return overrides


def fail_startup(service_name: str, exc: ConfigurationError) -> None:
    configure_logging(service_name=service_name)
    logger.critical("%s microservice cannot start: %s", service_name, exc)
    sys.exit(1)


def run_service(
    service_name: str,
    app_factory: Callable[[ServiceSettings], FastAPI],
    settings: ServiceSettings,
    base_path: str,
) -> None:
    configure_logging(settings.LOG_LEVEL, settings.LOG_DIR, service_name)
    try:
        app = app_factory(settings)
    except ConfigurationError as e:
        fail_startup(service_name, e)

    logger.info(
        "%s microservice running on http://%s:%s%s",
        service_name.capitalize(), settings.HOST, settings.PORT, base_path
    )
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_config=None,
                log_level=settings.LOG_LEVEL.lower())
