"""
Spreadsheet data source clients.
Google Sheets v4 values API over REST, with retries on transient failures.
"""
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import requests
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from core.config import get_settings
from core.exceptions import ConfigurationError, DataSourceError
from core.logger import setup_logger
from core.ranges import RangeSpec

logger = setup_logger(__name__)

RETRYABLE_STATUS = {429, 500, 502, 503, 504}


class RetryableHTTPError(requests.exceptions.HTTPError):
    """HTTP status worth retrying (rate limit or server error)."""


class SheetClient:
    """
    Read-only access to the monthly report spreadsheet.

    fetch_range returns the raw grid of a range ([] when the range holds no
    values) and raises DataSourceError when the source cannot be read.
    """

    def fetch_range(self, sheet_name: str, range_spec: RangeSpec) -> List[List[Any]]:
        raise NotImplementedError

    def list_sheets(self) -> List[str]:
        raise NotImplementedError


class GoogleSheetsClient(SheetClient):
    """Google Sheets REST client authenticated with an API key or OAuth access token."""

    def __init__(self):
        """Initialize REST client from settings."""
        settings = get_settings()
        if not settings.google_sheets_id:
            raise ConfigurationError(
                "GOOGLE_SHEETS_ID environment variable not set",
                details={"required_key": "GOOGLE_SHEETS_ID"}
            )
        if not settings.google_api_key and not settings.google_access_token:
            raise ConfigurationError(
                "Google Sheets credentials not found",
                details={"required_key": "GOOGLE_API_KEY or GOOGLE_ACCESS_TOKEN"}
            )

        self.spreadsheet_id = settings.google_sheets_id
        self.base_url = settings.google_sheets_base_url.rstrip("/")
        self.api_key = settings.google_api_key
        self.access_token = settings.google_access_token
        self.timeout = settings.google_timeout
        self.session = requests.Session()

        logger.info(f"Initialized Google Sheets client for spreadsheet {self.spreadsheet_id}")

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.access_token:
            headers["Authorization"] = f"Bearer {self.access_token}"
        return headers

    def _params(self, extra: Optional[Dict[str, str]] = None) -> Dict[str, str]:
        params = dict(extra or {})
        if self.api_key:
            params["key"] = self.api_key
        return params

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=8),
        retry=retry_if_exception_type((
            requests.exceptions.ConnectionError,
            requests.exceptions.Timeout,
            RetryableHTTPError,
        )),
        reraise=True
    )
    def _get(self, url: str, params: Dict[str, str]) -> Dict[str, Any]:
        response = self.session.get(
            url,
            params=params,
            headers=self._headers(),
            timeout=self.timeout
        )
        if response.status_code in RETRYABLE_STATUS:
            raise RetryableHTTPError(
                f"{response.status_code} Server Error for url: {response.url}",
                response=response
            )
        response.raise_for_status()
        return response.json()

    def _request(self, url: str, params: Dict[str, str], context: Dict[str, Any]) -> Dict[str, Any]:
        try:
            return self._get(url, params)

        except requests.exceptions.Timeout as e:
            logger.error(f"Google Sheets request timeout after {self.timeout}s: {e}")
            raise DataSourceError(
                f"Google Sheets request timeout after {self.timeout}s",
                details={**context, "timeout": self.timeout}
            )

        except requests.exceptions.HTTPError as e:
            logger.error(f"Google Sheets HTTP error: {e}")
            raise DataSourceError(
                f"Google Sheets returned HTTP error: {e}",
                details={
                    **context,
                    "status_code": getattr(e.response, "status_code", None),
                    "response_text": getattr(e.response, "text", None),
                }
            )

        except requests.exceptions.RequestException as e:
            logger.error(f"Google Sheets request failed: {e}")
            raise DataSourceError(
                f"Failed to connect to Google Sheets: {str(e)}",
                details={**context, "error": str(e)}
            )

        except ValueError as e:
            logger.error(f"Google Sheets returned invalid JSON: {e}")
            raise DataSourceError(
                f"Google Sheets returned invalid JSON: {e}",
                details={**context, "error": str(e)}
            )

    def fetch_range(self, sheet_name: str, range_spec: RangeSpec) -> List[List[Any]]:
        """
        Fetch the formatted values of a range.

        Args:
            sheet_name: Monthly sheet, e.g. "AUG25"
            range_spec: Rectangular range

        Returns:
            Rows of cell values; trailing empty cells and rows are omitted by the API

        Raises:
            DataSourceError: If the request fails
        """
        a1 = f"'{sheet_name}'!{range_spec}"
        url = f"{self.base_url}/{self.spreadsheet_id}/values/{quote(a1, safe='')}"
        params = self._params({"majorDimension": "ROWS", "valueRenderOption": "FORMATTED_VALUE"})

        logger.debug(f"Fetching {a1}")
        data = self._request(url, params, {"sheet": sheet_name, "range": str(range_spec)})
        values = data.get("values") or []
        logger.debug(f"Fetched {len(values)} rows from {a1}")
        return values

    def list_sheets(self) -> List[str]:
        """
        List sheet titles of the spreadsheet.

        Raises:
            DataSourceError: If the request fails
        """
        url = f"{self.base_url}/{self.spreadsheet_id}"
        params = self._params({"fields": "sheets.properties.title"})
        data = self._request(url, params, {"spreadsheet_id": self.spreadsheet_id})
        return [sheet["properties"]["title"] for sheet in data.get("sheets", [])]


# Singleton client instance
_client: Optional[SheetClient] = None


def get_client() -> SheetClient:
    """
    Get or create the configured spreadsheet client singleton.

    Returns:
        GoogleSheetsClient or WorkbookClient depending on DATA_SOURCE
    """
    global _client
    if _client is None:
        if get_settings().data_source == "workbook":
            from sheets.workbook import WorkbookClient
            _client = WorkbookClient()
        else:
            _client = GoogleSheetsClient()
    return _client


def reset_client() -> None:
    """Reset client singleton (useful for testing)."""
    global _client
    _client = None
