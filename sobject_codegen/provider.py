"""Metadata providers for SObject catalogs and descriptions.

This module provides a Salesforce REST client and an offline provider
reading describe payloads from a JSON dump, both with error handling
that reports every failure as a ProviderError.
"""

import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any
from urllib.parse import quote, urlparse

import requests

from .core.config import ConfigurationError
from .core.schema import (
    Catalog,
    ObjectDescription,
    convert_catalog_output,
    convert_describe_output,
)
from .logging_config import get_logger

logger = get_logger(__name__)


class ProviderError(Exception):
    """Raised when metadata cannot be fetched or parsed."""

    pass


class AuthenticationError(ProviderError):
    """Raised when the Salesforce login is rejected."""

    pass


class MetadataProvider(ABC):
    """Source of the object catalog and object descriptions."""

    @abstractmethod
    def fetch_catalog(self) -> Catalog:
        """Return the names of all objects."""

    @abstractmethod
    def fetch_description(self, name: str) -> ObjectDescription:
        """Return the description of one object."""

    def close(self) -> None:
        """Release resources held by the provider."""

    def __enter__(self) -> "MetadataProvider":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class SalesforceClient(MetadataProvider):
    """Fetches metadata from the Salesforce REST API.

    Logs in with the OAuth2 username-password flow on first use and
    revokes the token on close.

    Example:
        >>> with SalesforceClient(client_id, secret, user, password) as client:
        ...     names = client.fetch_catalog()
    """

    TOKEN_PATH = "/services/oauth2/token"
    REVOKE_PATH = "/services/oauth2/revoke"

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        username: str,
        password: str,
        version: str = "59.0",
        login_url: str = "https://login.salesforce.com",
        timeout: float = 60.0,
        session: requests.Session | None = None,
    ) -> None:
        parsed_url = urlparse(login_url)
        if not all([parsed_url.scheme, parsed_url.netloc]):
            raise ProviderError(f"Invalid login URL: {login_url}")

        self.client_id = client_id
        self.client_secret = client_secret
        self.username = username
        self.password = password
        self.version = version
        self.login_url = login_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.access_token: str | None = None
        self.instance_url: str | None = None

    def login(self) -> None:
        """Obtain an access token.

        Raises:
            AuthenticationError: If Salesforce rejects the credentials.
            ProviderError: If the login request fails.
        """
        logger.info("Salesforce login...")
        url = self.login_url + self.TOKEN_PATH
        data = self._request(
            "POST",
            url,
            data={
                "grant_type": "password",
                "client_id": self.client_id,
                "client_secret": self.client_secret,
                "username": self.username,
                "password": self.password,
            },
            authenticated=False,
        )

        if (
            not isinstance(data, dict)
            or not isinstance(data.get("access_token"), str)
            or not isinstance(data.get("instance_url"), str)
        ):
            logger.error(f"Unexpected login response from {url}")
            raise ProviderError("Salesforce login error: unexpected token response")

        self.access_token = data["access_token"]
        self.instance_url = data["instance_url"].rstrip("/")
        logger.info("Salesforce login successful")

    def fetch_catalog(self) -> Catalog:
        """Return the names of all objects of the organization."""
        logger.info("Getting Salesforce Objects...")
        payload = self._get("sobjects/")
        try:
            return convert_catalog_output(payload)
        except ValueError as e:
            logger.error(f"Error getting global Objects: {e}")
            raise ProviderError(f"Error getting global Objects: {e}") from e

    def fetch_description(self, name: str) -> ObjectDescription:
        """Return the description of one object."""
        logger.debug(f"Describing {name}")
        payload = self._get(f"sobjects/{quote(name, safe='')}/describe/")
        try:
            return convert_describe_output(payload)
        except ValueError as e:
            logger.error(f"Error getting SObject description for {name}: {e}")
            raise ProviderError(f"Error getting SObject description for {name}: {e}") from e

    def close(self) -> None:
        """Revoke the access token and close the HTTP session."""
        try:
            if self.access_token:
                try:
                    self.session.post(
                        self.login_url + self.REVOKE_PATH,
                        data={"token": self.access_token},
                        timeout=self.timeout,
                    )
                except requests.exceptions.RequestException as e:
                    logger.warning(f"Salesforce logout failed: {e}")
                self.access_token = None
        finally:
            self.session.close()

    def _get(self, resource: str) -> Any:
        if self.access_token is None:
            self.login()
        url = f"{self.instance_url}/services/data/v{self.version}/{resource}"
        return self._request("GET", url)

    def _request(self, method: str, url: str, authenticated: bool = True, **kwargs) -> Any:
        """Send a request and decode the JSON response."""
        headers = {"Accept": "application/json"}
        if authenticated:
            headers["Authorization"] = f"Bearer {self.access_token}"

        try:
            response = self.session.request(
                method, url, headers=headers, timeout=self.timeout, **kwargs
            )
            response.raise_for_status()
            return response.json()

        except requests.exceptions.Timeout as e:
            logger.error(f"Request timeout for URL: {url}")
            raise ProviderError(f"Request timeout after {self.timeout}s for URL: {url}") from e
        except requests.exceptions.ConnectionError as e:
            logger.error(f"Connection error for URL {url}: {e}")
            raise ProviderError(f"Connection error for URL: {url}") from e
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            detail = _error_detail(e.response)
            logger.error(f"HTTP error {status} for URL: {url}")
            if not authenticated and status in (400, 401):
                raise AuthenticationError(f"Salesforce login error: {detail}") from e
            if status == 401:
                raise AuthenticationError(f"Salesforce session rejected: {detail}") from e
            raise ProviderError(f"HTTP error {status} for URL {url}: {detail}") from e
        except ValueError as e:
            logger.error(f"Invalid JSON response from URL {url}: {e}")
            raise ProviderError(f"Invalid JSON response from URL {url}: {e}") from e
        except requests.exceptions.RequestException as e:
            logger.error(f"Request error for URL {url}: {e}", exc_info=True)
            raise ProviderError(f"Request error for URL {url}: {e}") from e


def _error_detail(response: requests.Response | None) -> str:
    """Extract a readable message from a Salesforce error response."""
    if response is None:
        return "no response"
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason or "unknown error"

    # OAuth errors are objects, REST errors are lists of objects
    if isinstance(body, dict):
        return body.get("error_description") or body.get("error") or str(body)
    if isinstance(body, list) and body and isinstance(body[0], dict):
        return body[0].get("message") or str(body[0])
    return str(body)


class FileMetadataProvider(MetadataProvider):
    """Reads describe payloads from a JSON dump.

    The file holds ``{"sobjects": [<describe payload>, ...]}``.
    """

    def __init__(self, file_path: str | Path) -> None:
        self.file_path = Path(file_path)
        self._descriptions: dict[str, dict[str, Any]] | None = None

    def _load(self) -> dict[str, dict[str, Any]]:
        if self._descriptions is not None:
            return self._descriptions

        logger.debug(f"Loading metadata dump: {self.file_path}")
        if not self.file_path.exists():
            logger.error(f"File not found: {self.file_path}")
            raise ProviderError(f"Metadata file not found: {self.file_path}")

        try:
            with self.file_path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON in file {self.file_path}: {e}")
            raise ProviderError(f"Invalid JSON in file {self.file_path}: {e}") from e
        except OSError as e:
            logger.error(f"Error reading file {self.file_path}: {e}")
            raise ProviderError(f"Error reading file {self.file_path}: {e}") from e

        try:
            convert_catalog_output(data)
        except ValueError as e:
            raise ProviderError(f"Malformed metadata file {self.file_path}: {e}") from e

        self._descriptions = {entry["name"]: entry for entry in data["sobjects"]}
        logger.info(f"Loaded {len(self._descriptions)} objects from {self.file_path}")
        return self._descriptions

    def fetch_catalog(self) -> Catalog:
        return frozenset(self._load())

    def fetch_description(self, name: str) -> ObjectDescription:
        descriptions = self._load()
        if name not in descriptions:
            raise ProviderError(f"No description for {name} in {self.file_path}")
        try:
            return convert_describe_output(descriptions[name])
        except ValueError as e:
            raise ProviderError(f"Malformed description of {name}: {e}") from e


def create_provider(config) -> MetadataProvider:
    """Create the provider selected by a GeneratorConfig.

    A configured metadata file wins over Salesforce credentials.

    Raises:
        ConfigurationError: If credentials are missing.
    """
    if config.metadata_file:
        return FileMetadataProvider(config.metadata_file)

    missing = [
        key
        for key in ("client_id", "client_secret", "username", "password")
        if not getattr(config, key)
    ]
    if missing:
        raise ConfigurationError(f"Missing Salesforce credentials: {', '.join(missing)}")

    return SalesforceClient(
        client_id=config.client_id,
        client_secret=config.client_secret,
        username=config.username,
        password=config.password,
        version=config.version,
        login_url=config.login_url,
        timeout=config.timeout,
    )
