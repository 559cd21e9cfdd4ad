"""
Auth microservice - credential check and session token issuance
"""
import click
from fastapi import FastAPI

from ..common.app import build_app
from ..common.cli import fail_startup, run_service, server_options, settings_overrides
from ..common.config import AuthSettings, load_auth_settings
from ..common.errors import ConfigurationError
from .routes import auth

SERVICE_NAME = "auth"
BASE_PATH = "/api/auth"
DEFAULT_PORT = 8000


def create_app(settings: AuthSettings) -> FastAPI:
    """
    Build the auth app.

    Raises:
        ConfigurationError: If the settings carry no signing secret
    """
    if not getattr(settings, "SECRET_KEY", ""):
        raise ConfigurationError("SECRET_KEY is not configured")
    return build_app("Auth microservice", settings, [auth.router])


@click.command()
@server_options(DEFAULT_PORT)
def main(database_url, host, port, env_file):
    """Run the auth microservice."""
    try:
        settings = load_auth_settings(env_file or ".env", **settings_overrides(database_url, host, port))
    except ConfigurationError as e:
        fail_startup(SERVICE_NAME, e)
    run_service(SERVICE_NAME, create_app, settings, BASE_PATH)


if __name__ == "__main__":
    main()
