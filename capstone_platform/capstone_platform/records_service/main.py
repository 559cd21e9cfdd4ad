"""
Records microservice - capstone entry records
"""
import click
from fastapi import FastAPI

from ..common.app import build_app
from ..common.cli import fail_startup, run_service, server_options, settings_overrides
from ..common.config import ServiceSettings, load_service_settings
from ..common.errors import ConfigurationError
from .routes import records

SERVICE_NAME = "records"
BASE_PATH = "/api/records"
DEFAULT_PORT = 8001


def create_app(settings: ServiceSettings) -> FastAPI:
    return build_app("Records microservice", settings, [records.router])


@click.command()
@server_options(DEFAULT_PORT)
def main(database_url, host, port, env_file):
    """Run the records microservice."""
    try:
        settings = load_service_settings(env_file, **settings_overrides(database_url, host, port))
    except ConfigurationError as e:
        fail_startup(SERVICE_NAME, e)
    run_service(SERVICE_NAME, create_app, settings, BASE_PATH)


if __name__ == "__main__":
    main()
