from fastapi import Request

from app.platform.config import Settings


def get_app_settings(request: Request) -> Settings:
    """The Settings instance the application was created with."""
    return request.app.state.settings
