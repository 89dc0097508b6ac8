"""
Minimal Salesforce REST client for creating and updating sObject records.
"""

import json
from typing import Any, Dict, Optional

import httpx

from src.util.logging import get_logger

logger = get_logger(__name__)


class SalesforceError(Exception):
    """Salesforce rejected a request."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        error_code: Optional[str] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.error_code = error_code


class RemoteUnavailable(SalesforceError):
    """The API could not be reached or answered with something other than JSON."""


class RemoteNotFound(SalesforceError):
    """The record does not exist (anymore) in Salesforce."""


def _parse_json(response: httpx.Response) -> Any:
    """Decode a response body; empty bodies decode to None."""
    if not response.content:
        return None
    try:
        return response.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise RemoteUnavailable(
            f"Unparseable response from Salesforce "
            f"(status {response.status_code}): {response.text[:200]}",
            status_code=response.status_code,
        ) from e


def _raise_for_status(response: httpx.Response, body: Any) -> None:
    if response.status_code < 400:
        return

    error_code = None
    message = response.reason_phrase
    # Salesforce errors come as [{"message": ..., "errorCode": ...}]
    if isinstance(body, list) and body and isinstance(body[0], dict):
        error_code = body[0].get("errorCode")
        message = body[0].get("message", message)
    elif isinstance(body, dict):
        error_code = body.get("errorCode") or body.get("error")
        message = body.get("message") or body.get("error_description", message)

    error_class = (
        RemoteNotFound if response.status_code == 404 else SalesforceError
    )
    raise error_class(
        f"{error_code or response.status_code}: {message}",
        status_code=response.status_code,
        error_code=error_code,
    )


class SalesforceClient:
    """
    Salesforce REST API client.

    Logs in with the OAuth 2.0 username-password flow on the first request
    and reuses the session for later ones.
    """

    def __init__(
        self,
        login_url: str,
        credentials: Dict[str, str],
        api_version: str = "58.0",
        timeout: float = 30.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.login_url = login_url.rstrip("/")
        self.credentials = credentials
        self.api_version = api_version
        self._http = httpx.Client(timeout=timeout, transport=transport)
        self._access_token: Optional[str] = None
        self._instance_url: Optional[str] = None

    @classmethod
    def from_settings(cls, settings=None) -> "SalesforceClient":
        if settings is None:
            from src.settings import salesforce_settings as settings

        return cls(
            login_url=settings.login_url,
            credentials=settings.credentials(),
            api_version=settings.api_version,
            timeout=settings.timeout,
        )

    def close(self) -> None:
        self._http.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def _send(self, method: str, url: str, **kwargs) -> httpx.Response:
        try:
            return self._http.request(method, url, **kwargs)
        except httpx.TransportError as e:
            raise RemoteUnavailable(f"Salesforce request failed: {e}") from e

    def authenticate(self) -> None:
        """Request an access token and the instance URL."""
        logger.info(f"Authenticating with Salesforce at {self.login_url}")
        response = self._send(
            "POST",
            f"{self.login_url}/services/oauth2/token",
            data=self.credentials,
        )
        body = _parse_json(response)
        _raise_for_status(response, body)
        if not isinstance(body, dict) or "access_token" not in body:
            raise RemoteUnavailable("Salesforce token response has no access token")
        self._access_token = body["access_token"]
        self._instance_url = body["instance_url"].rstrip("/")

    def _send_authorized(self, method: str, path: str, **kwargs) -> httpx.Response:
        url = f"{self._instance_url}/services/data/v{self.api_version}/{path}"
        headers = {
            "Authorization": f"Bearer {self._access_token}",
            "Accept": "application/json",
        }
        return self._send(method, url, headers=headers, **kwargs)

    def _request(self, method: str, path: str, **kwargs) -> Any:
        fresh_session = self._access_token is None
        if fresh_session:
            self.authenticate()
        response = self._send_authorized(method, path, **kwargs)
        if response.status_code == 401 and not fresh_session:
            # Expired session: log in again and resend once
            logger.info("Salesforce session expired, re-authenticating")
            self.authenticate()
            response = self._send_authorized(method, path, **kwargs)
        body = _parse_json(response)
        _raise_for_status(response, body)
        return body

    def create(self, sobject: str, fields: Dict[str, Any]) -> str:
        """
        Create a record.

        Args:
            sobject: sObject API name, e.g. Course__c
            fields: Field name -> value

        Returns:
            str: Id of the new record
        """
        body = self._request("POST", f"sobjects/{sobject}/", json=fields)
        if not isinstance(body, dict) or not body.get("id"):
            raise SalesforceError(f"Create {sobject} returned no id: {body}")
        logger.info(f"Created {sobject} record {body['id']}")
        return body["id"]

    def update(self, sobject: str, record_id: str, fields: Dict[str, Any]) -> bool:
        """
        Update a record. Salesforce answers a successful update with 204.

        Args:
            sobject: sObject API name, e.g. Course__c
            record_id: Id of the record to update
            fields: Field name -> value

        Returns:
            bool: True once the update is accepted
        """
        self._request("PATCH", f"sobjects/{sobject}/{record_id}", json=fields)
        logger.info(f"Updated {sobject} record {record_id}")
        return True
