"""
HTTP client the Streamlit page uses to talk to the Table Explorer API.
"""

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import requests

from table_explorer.config.settings import settings

logger = logging.getLogger("table_explorer")

DEFAULT_TIMEOUT = 60


class ExplorerApiError(Exception):
    """The API answered with an error or could not be reached."""

    def __init__(self, message: str, status_code: Optional[int] = None, kind: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.kind = kind


class ExplorerApiClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.base_url = (base_url or settings.get_explorer_api_url()).rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def _handle(self, response: requests.Response) -> Dict[str, Any]:
        if not response.ok:
            message = f"HTTP error! status: {response.status_code}"
            kind = None
            try:
                body = response.json()
            except ValueError:
                body = None
            if isinstance(body, dict) and body.get("error"):
                message = body["error"]
                kind = body.get("kind")
            raise ExplorerApiError(message, status_code=response.status_code, kind=kind)
        return response.json()

    def _request(self, method: str, path: str, **kwargs) -> Dict[str, Any]:
        url = self._url(path)
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            logger.error(f"API request failed: {method} {url}: {e}")
            raise ExplorerApiError(f"Could not reach API at {self.base_url}: {e}") from e
        return self._handle(response)

    def list_tables(self) -> List[str]:
        return self._request("GET", "/api/tables").get("TableNames") or []

    def get_table_rows(self, table_name: str) -> List[Dict[str, Any]]:
        return self._request("GET", f"/api/getdata/{quote(table_name, safe='')}").get("Items") or []

    def ask(self, table_name: str, prompt: str) -> str:
        body = self._request(
            "POST",
            f"/api/prompts/{quote(table_name, safe='')}",
            json={"prompt": prompt},
        )
        return body.get("response", "")
