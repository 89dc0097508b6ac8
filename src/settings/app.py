from pathlib import Path

from src.util.logging import get_logger

from .base import BaseSettings

logger = get_logger(__name__)


class AppSettings(BaseSettings):
    """
    General application settings.
    """

    def __init__(self):
        """Load application settings."""
        # Application name
        self.app_name = self.get_env("APP_NAME", "course-salesforce-sync")

        # Debug mode
        self.debug = self.get_bool_env("DEBUG", False)

        # Data directory (settings store, log files)
        self.data_dir = self.get_env("DATA_DIR", "/var/lib/course-salesforce-sync")

        # Feature gate: when off, pushing a course does nothing
        self.salesforce_sync_enabled = self.get_bool_env(
            "SALESFORCE_SYNC_ENABLED", False
        )

        # Host of the dashboard, used to build course page links
        self.dashboard_url = self.get_env("DASHBOARD_URL", "dashboard.wikiedu.org")

        # Tracker API (course store)
        self.xc_token = self.get_env("XC_TOKEN", "")
        self.api_endpoint = self.get_env(
            "API_ENDPOINT", "http://localhost:8080/api/v2"
        )
        self.courses_table = self.get_env("COURSES_TABLE", "courses")
        self.api_timeout = self.get_float_env("API_TIMEOUT", 30.0)

        # Settings store file
        self.settings_file = self.get_env(
            "SETTINGS_FILE", str(Path(self.data_dir) / "settings.json")
        )

        if not self.salesforce_sync_enabled:
            logger.debug("Salesforce sync is disabled (SALESFORCE_SYNC_ENABLED)")
