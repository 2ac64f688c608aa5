"""
Base Report Client
Fetch capabilities consumed by the metrics builders, plus the shared
httpx plumbing for the concrete provider clients.
"""

import logging
from datetime import date
from typing import Any, Optional, Protocol

import httpx

from cashlens.core.exceptions import ReportFetchError
from cashlens.integrations.retry_handler import RetryHandler
from cashlens.metrics.periods import DateRange

logger = logging.getLogger(__name__)


class QuickBooksReportFetcher(Protocol):
    """Report fetch capability for a QuickBooks company (realm)."""

    async def fetch_profit_and_loss(self, realm_id: str, period: DateRange) -> dict[str, Any]:
        ...

    async def fetch_balance_sheet(self, realm_id: str, as_of: date) -> dict[str, Any]:
        ...


class XeroReportFetcher(Protocol):
    """Report and bank account fetch capability for a Xero tenant."""

    async def fetch_profit_and_loss(self, tenant_id: str, period: DateRange) -> dict[str, Any]:
        ...

    async def fetch_balance_sheet(self, tenant_id: str, as_of: date) -> dict[str, Any]:
        ...

    async def fetch_bank_accounts(self, tenant_id: str) -> dict[str, Any]:
        ...


class BaseReportClient:
    """Base class for provider report clients."""

    provider = "unknown"

    def __init__(
        self,
        access_token: str,
        base_url: str,
        timeout_seconds: float = 30.0,
        retry_handler: Optional[RetryHandler] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize base client.

        Args:
            access_token: OAuth bearer token obtained by the caller
            base_url: Provider API root
            timeout_seconds: Per-request timeout
            retry_handler: Optional retry handler (creates default if None)
            transport: Optional httpx transport, used by tests
        """
        self.access_token = access_token
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.retry_handler = retry_handler or RetryHandler()
        self.transport = transport

    def _headers(self, account_id: str) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.access_token}",
            "Accept": "application/json",
        }

    async def _get_json(
        self,
        path: str,
        account_id: str,
        params: Optional[dict[str, str]] = None,
        description: str = "report",
    ) -> dict[str, Any]:
        """
        GET a JSON document with retry, mapping every failure to ReportFetchError.
        """
        url = f"{self.base_url}{path}"

        async def _fetch() -> httpx.Response:
            async with httpx.AsyncClient(
                timeout=self.timeout_seconds,
                transport=self.transport,
            ) as client:
                response = await client.get(
                    url,
                    params=params,
                    headers=self._headers(account_id),
                )
                response.raise_for_status()
                return response

        try:
            response = await self.retry_handler.execute_with_retry(_fetch)
            return response.json()
        except httpx.HTTPStatusError as e:
            logger.error("%s API Error (%s): %s", self.provider, description, e)
            raise ReportFetchError(
                f"Failed to fetch {description}: {e.response.reason_phrase}",
                status_code=e.response.status_code,
                endpoint=path,
            ) from e
        except (httpx.HTTPError, ValueError) as e:
            logger.error("%s fetch failed (%s): %s", self.provider, description, e)
            raise ReportFetchError(
                f"Failed to fetch {description}: {e}",
                endpoint=path,
            ) from e
