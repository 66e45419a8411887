import os
from typing import Optional

SETTINGS_MODULES = {
    "prod": "config.production",
    "production": "config.production",
    "test": "config.testing",
    "testing": "config.testing",
    "dev": "config.development",
    "development": "config.development",
}


def get_settings_module(env: Optional[str] = None) -> str:
    """Settings module for ``env`` (defaults to ``APP_ENV``); unknown names mean development."""
    name = (env or os.getenv("APP_ENV", "development")).strip().lower()
    return SETTINGS_MODULES.get(name, "config.development")
