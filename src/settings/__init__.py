"""
Settings module: central access to the application's configuration.
Values come from environment variables (and a .env file when present).
"""

import logging
from pathlib import Path

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

from .app import AppSettings
from .salesforce import SalesforceSettings
from .sentry import SentrySettings

# Try .env in the current directory, then its parent
dotenv_path = Path(".env")
if dotenv_path.exists():
    load_dotenv(dotenv_path=dotenv_path)
else:
    parent_dotenv = Path("../.env")
    if parent_dotenv.exists():
        load_dotenv(dotenv_path=parent_dotenv)


# Private variables to hold settings instances
_app_settings = None
_salesforce_settings = None
_sentry_settings = None


# Lazy loading functions
def get_app_settings():
    global _app_settings
    if _app_settings is None:
        _app_settings = AppSettings()
    return _app_settings


def get_salesforce_settings():
    global _salesforce_settings
    if _salesforce_settings is None:
        _salesforce_settings = SalesforceSettings()
    return _salesforce_settings


def get_sentry_settings():
    global _sentry_settings
    if _sentry_settings is None:
        _sentry_settings = SentrySettings()
    return _sentry_settings


app_settings = get_app_settings()
salesforce_settings = get_salesforce_settings()
sentry_settings = get_sentry_settings()

__all__ = [
    "app_settings",
    "salesforce_settings",
    "sentry_settings",
    "get_app_settings",
    "get_salesforce_settings",
    "get_sentry_settings",
]
