import logging
from typing import Dict, Optional

from .base import BaseSettings

logger = logging.getLogger(__name__)


class SalesforceSettings(BaseSettings):
    """
    Salesforce API settings: connected app credentials, API version and
    the program record ids courses are filed under.
    """

    def __init__(self):
        self.login_url = self.get_env(
            "SALESFORCE_LOGIN_URL", "https://login.salesforce.com"
        ).rstrip("/")
        self.api_version = self.get_env("SALESFORCE_API_VERSION", "58.0")
        self.username = self.get_env("SALESFORCE_USERNAME", "")
        self.password = self.get_env("SALESFORCE_PASSWORD", "")
        self.security_token = self.get_env("SALESFORCE_SECURITY_TOKEN", "")
        self.client_id = self.get_env("SALESFORCE_CLIENT_ID", "")
        self.client_secret = self.get_env("SALESFORCE_CLIENT_SECRET", "")
        self.timeout = self.get_float_env("SALESFORCE_TIMEOUT", 30.0)

        # Course type -> Salesforce Program__c id, e.g.
        # {"ClassroomProgramCourse": "a0f1a000000AbCd"}
        self.program_ids: Dict[str, str] = self.get_json_env(
            "SALESFORCE_PROGRAM_IDS"
        )

    def is_configured(self) -> bool:
        return all(
            [self.username, self.password, self.client_id, self.client_secret]
        )

    def credentials(self) -> Dict[str, str]:
        """
        Form fields for the OAuth 2.0 username-password flow.

        Returns:
            Dict[str, str]: Token request payload
        """
        if not self.is_configured():
            logger.warning("Salesforce credentials are incomplete")
        return {
            "grant_type": "password",
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "username": self.username,
            # Salesforce expects the security token appended to the password
            "password": f"{self.password}{self.security_token}",
        }

    def program_id_for(self, course_type: Optional[str]) -> Optional[str]:
        if not course_type:
            return None
        return self.program_ids.get(course_type) or None
