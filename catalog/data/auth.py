from typing import Dict

import requests

from catalog.config import AppConfig, get_config
from catalog.logging import get_logger

class RecordApiAuthentication:
    """Builds authenticated HTTP sessions for the record API from an AppConfig."""
    def __init__(self, config: AppConfig = None) -> None:
        """Initializes the authentication handler, defaulting to the singleton AppConfig."""
        self.config = config or get_config()
        self.logger = get_logger(__name__)

    def get_auth_headers(self) -> Dict[str, str]:
        """Creates the request headers carrying the static API credential.

        Returns:
            dict: Headers to attach to every record API request.
        Raises:
            RuntimeError: If required configuration is missing.
        """
        if not self.config.catalog_api_url:
            self.logger.error("Missing record API URL (CATALOG_API_URL).")
            raise RuntimeError("Missing record API URL (CATALOG_API_URL).")
        if not self.config.catalog_api_key:
            self.logger.error("Missing record API key (CATALOG_API_KEY).")
            raise RuntimeError("Missing record API key (CATALOG_API_KEY).")
        self.logger.info("Configuring record API authentication with static API key")
        return {
            "Authorization": f"Bearer {self.config.catalog_api_key}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    def get_session(self) -> requests.Session:
        """Returns a requests.Session with authentication headers applied.

        Returns:
            requests.Session: The session used by RestRecordStore.
        """
        headers = self.get_auth_headers()
        self.logger.info(f"Creating record API session for: {self.config.catalog_api_url}")
        session = requests.Session()
        session.headers.update(headers)
        return session

def get_record_api_auth(config: AppConfig = None) -> RecordApiAuthentication:
    """Returns a new RecordApiAuthentication instance using the given or latest config."""
    return RecordApiAuthentication(config)
