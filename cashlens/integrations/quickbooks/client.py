"""
QuickBooks Report Client
Fetches ProfitAndLoss and BalanceSheet reports from QuickBooks Online.
"""

import logging
from datetime import date
from typing import Any, Optional

import httpx

from cashlens.config import QuickBooksConfig
from cashlens.integrations.base import BaseReportClient
from cashlens.integrations.retry_handler import RetryHandler
from cashlens.metrics.periods import DateRange

logger = logging.getLogger(__name__)


class QuickBooksReportClient(BaseReportClient):
    """Report client for one QuickBooks access token."""

    provider = "QuickBooks"

    def __init__(
        self,
        config: QuickBooksConfig,
        access_token: str,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(
            access_token=access_token,
            base_url=config.base_url,
            timeout_seconds=config.timeout_seconds,
            retry_handler=RetryHandler.from_config(config.retry),
            transport=transport,
        )

    async def fetch_profit_and_loss(self, realm_id: str, period: DateRange) -> dict[str, Any]:
        """
        Fetch a ProfitAndLoss report for an inclusive date range.

        Returns:
            Raw report JSON
        """
        logger.debug(
            "Fetching QuickBooks P&L %s..%s", period.start.isoformat(), period.end.isoformat()
        )
        return await self._get_json(
            f"/v3/company/{realm_id}/reports/ProfitAndLoss",
            realm_id,
            params={
                "start_date": period.start.isoformat(),
                "end_date": period.end.isoformat(),
            },
            description="P&L",
        )

    async def fetch_balance_sheet(self, realm_id: str, as_of: date) -> dict[str, Any]:
        """Fetch a BalanceSheet report as of a date."""
        return await self._get_json(
            f"/v3/company/{realm_id}/reports/BalanceSheet",
            realm_id,
            params={"date": as_of.isoformat()},
            description="balance sheet",
        )
