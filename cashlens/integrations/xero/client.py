"""
Xero Report Client
Fetches ProfitAndLoss, BalanceSheet and bank accounts from the Xero accounting API.
"""

import logging
from datetime import date
from typing import Any, Optional

import httpx

from cashlens.config import XeroConfig
from cashlens.integrations.base import BaseReportClient
from cashlens.integrations.retry_handler import RetryHandler
from cashlens.metrics.periods import DateRange

logger = logging.getLogger(__name__)

BANK_ACCOUNTS_FILTER = 'Type=="BANK"'


class XeroReportClient(BaseReportClient):
    """Report client for one Xero access token. Every call names its tenant."""

    provider = "Xero"

    def __init__(
        self,
        config: XeroConfig,
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

    def _headers(self, account_id: str) -> dict[str, str]:
        headers = super()._headers(account_id)
        headers["xero-tenant-id"] = account_id
        return headers

    async def fetch_profit_and_loss(self, tenant_id: str, period: DateRange) -> dict[str, Any]:
        """
        Fetch a ProfitAndLoss report for an inclusive date range.

        Returns:
            Raw response with a top-level "Reports" list
        """
        logger.debug(
            "Fetching Xero P&L %s..%s", period.start.isoformat(), period.end.isoformat()
        )
        return await self._get_json(
            "/Reports/ProfitAndLoss",
            tenant_id,
            params={
                "fromDate": period.start.isoformat(),
                "toDate": period.end.isoformat(),
            },
            description="P&L",
        )

    async def fetch_balance_sheet(self, tenant_id: str, as_of: date) -> dict[str, Any]:
        return await self._get_json(
            "/Reports/BalanceSheet",
            tenant_id,
            params={"date": as_of.isoformat()},
            description="balance sheet",
        )

    async def fetch_bank_accounts(self, tenant_id: str) -> dict[str, Any]:
        """Fetch the BANK-type account listing."""
        return await self._get_json(
            "/Accounts",
            tenant_id,
            params={"where": BANK_ACCOUNTS_FILTER},
            description="bank accounts",
        )
