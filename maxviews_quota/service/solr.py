"""
Service module for querying the Solr index of the access log using httpx.
"""

import json
import logging
from typing import Any, Dict, List, Optional, Union, cast

import httpx
from httpx import Limits, Timeout

logger = logging.getLogger(__name__)


class SolrService:
    """
    Service for interacting with Solr using httpx with connection pooling.

    Responses are not cached: view counts must always reflect the log as it
    is at query time.
    """

    def __init__(
        self,
        base_url: str,
        timeout: int = 30,
        max_connections: int = 100,
        max_keepalive_connections: int = 20,
        username: Optional[str] = None,
        password: Optional[str] = None,
        proxy_url: Optional[str] = None,
    ):
        """
        Initialize the Solr service with connection pooling.

        Args:
            base_url: Base URL of the Solr service (e.g., 'http://localhost:8983/solr')
            timeout: Request timeout in seconds
            max_connections: Maximum number of connections in the pool
            max_keepalive_connections: Maximum number of idle connections to keep in the pool
            username: Optional username for basic authentication
            password: Optional password for basic authentication
            proxy_url: Optional proxy URL to use for requests
        """
        self.base_url = base_url.rstrip("/")
        limits = Limits(
            max_connections=max_connections,
            max_keepalive_connections=max_keepalive_connections,
        )

        self.client = httpx.Client(
            timeout=Timeout(timeout),
            limits=limits,
            headers={"Content-Type": "application/json"},
            auth=(
                httpx.BasicAuth(username=username, password=password)
                if username and password
                else None
            ),
            proxy=proxy_url,
        )
        self._auth_credentials = (username, password) if username and password else None

    @property
    def authentication_details(self) -> str | None:
        """Solr client auth details (redacted)."""
        if self._auth_credentials:
            username, password = self._auth_credentials
            redacted_password = "[REDACTED]" if password else "None"
            return f"Basic Auth: {username}:{redacted_password}"
        return None

    def close(self) -> None:
        """Close the httpx client explicitly."""
        self.client.close()

    def post_query(
        self,
        collection: str,
        body: Dict[str, Any],
        handler: str = "select",
    ) -> Dict[str, Any]:
        """
        Send a POST request to Solr.

        Args:
            collection: Name of the Solr collection
            body: Request body to send to Solr
            handler: Solr request handler (default: 'select')

        Returns:
            Parsed JSON response from Solr

        Raises:
            httpx.HTTPStatusError: On HTTP status errors
            httpx.RequestError: On request errors
            ValueError: On invalid responses
        """
        url = f"{self.base_url}/{collection}/{handler}"
        logger.debug(
            "Sending POST request to Solr collection '%s' at %s with body: %s",
            collection,
            url,
            body,
        )
        response = self.client.post(url, json=body)
        try:
            response.raise_for_status()
            return cast(Dict[str, Any], response.json())
        except httpx.HTTPStatusError as e:
            logger.error(
                "HTTP error querying Solr collection '%s': %s : %s",
                collection,
                str(e),
                response.text,
            )
            raise
        except json.JSONDecodeError as exc:
            raise ValueError(
                f"Invalid JSON response from Solr: {response.text}"
            ) from exc

    def count(
        self,
        collection: str,
        q: str = "*:*",
        fq: Optional[Union[str, List[str]]] = None,
    ) -> int:
        """
        Count the documents matching a query without fetching any of them.

        Args:
            collection: Name of the Solr collection
            q: Query string (default: '*:*')
            fq: Filter query string or list of filter queries

        Returns:
            The number of matching documents

        Raises:
            ValueError: When the response carries no document count
        """
        body: Dict[str, Any] = {"query": q, "limit": 0}
        if fq:
            body["filter"] = fq

        response = self.post_query(collection, body)
        num_found = response.get("response", {}).get("numFound")
        if not isinstance(num_found, int):
            raise ValueError(f"Solr response has no document count: {response}")
        return num_found
