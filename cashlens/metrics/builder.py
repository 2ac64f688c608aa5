"""
Canonical Metrics Builder
Combines per-provider report fetches into one CanonicalMetrics record.

Period policy:
- revenue and expenses come from the prior complete month
- cash comes from reports as of today

All fetches for one build run concurrently. If any fetch fails the others
are cancelled and the build fails with SourceDataUnavailableError; a
partial record is never returned. Missing line items inside a fetched
report, or a report that is not a JSON object, still read as 0.
"""

import asyncio
import logging
from datetime import date
from typing import Any, Awaitable, Callable, Optional

from cashlens.core.exceptions import SourceDataUnavailableError
from cashlens.integrations.base import QuickBooksReportFetcher, XeroReportFetcher
from cashlens.integrations.quickbooks import adapters as quickbooks
from cashlens.integrations.xero import adapters as xero
from cashlens.metrics.periods import as_of, current_month, prior_month
from cashlens.metrics.schemas import CanonicalMetrics, MetricsSnapshot

logger = logging.getLogger(__name__)


class MetricsBuilder:
    """Base class for provider metrics builders."""

    provider = "unknown"

    def __init__(self, today: Optional[Callable[[], date]] = None):
        """
        Args:
            today: Optional clock returning the reference date (defaults to date.today)
        """
        self._today = today or date.today

    async def build(self, account_id: str) -> MetricsSnapshot:
        raise NotImplementedError

    async def _gather(self, account_id: str, *fetches: Awaitable[Any]) -> list[dict[str, Any]]:
        """
        Await independent fetches together, results in request order.

        When one fetch fails the others are cancelled before the error is
        raised, so no fetch outlives the build.

        Raises:
            SourceDataUnavailableError: If any fetch fails
        """
        tasks = [asyncio.ensure_future(fetch) for fetch in fetches]
        try:
            results = await asyncio.gather(*tasks)
        except Exception as e:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)

            logger.error(
                "%s source data unavailable for account %s: %s",
                self.provider,
                account_id,
                e,
            )
            raise SourceDataUnavailableError(
                f"{self.provider} source data unavailable: {e}",
                provider=self.provider,
            ) from e

        return [self._as_report(result) for result in results]

    def _as_report(self, payload: Any) -> dict[str, Any]:
        """Non-object JSON is a report with no line items."""
        if isinstance(payload, dict):
            return payload
        logger.warning(
            "%s returned a %s payload, treating as empty report",
            self.provider,
            type(payload).__name__,
        )
        return {}


class QuickBooksMetricsBuilder(MetricsBuilder):
    """
    QuickBooks build: month-to-date P&L, prior month P&L and balance sheet.

    Cash is the "Cash and cash equivalents" balance sheet line.
    """

    provider = "quickbooks"

    def __init__(
        self,
        fetcher: QuickBooksReportFetcher,
        today: Optional[Callable[[], date]] = None,
    ):
        super().__init__(today)
        self.fetcher = fetcher

    async def build(self, account_id: str) -> MetricsSnapshot:
        today = self._today()

        current_pnl, prior_pnl, balance_sheet = await self._gather(
            account_id,
            self.fetcher.fetch_profit_and_loss(account_id, current_month(today)),
            self.fetcher.fetch_profit_and_loss(account_id, prior_month(today)),
            self.fetcher.fetch_balance_sheet(account_id, as_of(today)),
        )

        metrics = CanonicalMetrics(
            cash_balance=quickbooks.extract_cash_balance(balance_sheet),
            monthly_revenue=quickbooks.extract_revenue(prior_pnl),
            monthly_expenses=quickbooks.extract_expenses(prior_pnl),
        )
        logger.info(
            "Built QuickBooks metrics for %s: cash=%s revenue=%s expenses=%s",
            account_id,
            metrics.cash_balance,
            metrics.monthly_revenue,
            metrics.monthly_expenses,
        )

        return MetricsSnapshot(
            provider=self.provider,
            metrics=metrics,
            profit_and_loss=prior_pnl,
            balance_sheet=balance_sheet,
            current_month_profit_and_loss=current_pnl,
        )


class XeroMetricsBuilder(MetricsBuilder):
    """
    Xero build: prior month P&L, balance sheet and bank account listing.

    Cash is the sum of bank account balances, not a balance sheet line.
    """

    provider = "xero"

    def __init__(
        self,
        fetcher: XeroReportFetcher,
        today: Optional[Callable[[], date]] = None,
    ):
        super().__init__(today)
        self.fetcher = fetcher

    async def build(self, account_id: str) -> MetricsSnapshot:
        today = self._today()

        prior_pnl, balance_sheet, bank_accounts = await self._gather(
            account_id,
            self.fetcher.fetch_profit_and_loss(account_id, prior_month(today)),
            self.fetcher.fetch_balance_sheet(account_id, as_of(today)),
            self.fetcher.fetch_bank_accounts(account_id),
        )

        metrics = CanonicalMetrics(
            cash_balance=xero.extract_cash_balance(bank_accounts),
            monthly_revenue=xero.extract_revenue(prior_pnl),
            monthly_expenses=xero.extract_expenses(prior_pnl),
        )
        logger.info(
            "Built Xero metrics for %s: cash=%s revenue=%s expenses=%s",
            account_id,
            metrics.cash_balance,
            metrics.monthly_revenue,
            metrics.monthly_expenses,
        )

        return MetricsSnapshot(
            provider=self.provider,
            metrics=metrics,
            profit_and_loss=prior_pnl,
            balance_sheet=balance_sheet,
        )
