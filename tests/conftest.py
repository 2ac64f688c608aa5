import asyncio
import json
from datetime import date
from pathlib import Path
from typing import Any, Optional

import pytest

from cashlens.insights.prompts import PromptContext
from cashlens.metrics.periods import DateRange


FIXTURES = Path(__file__).parent / "fixtures"

TODAY = date(2026, 10, 19)


def _load(name: str) -> dict:
    return json.loads((FIXTURES / name).read_text(encoding="utf-8"))


@pytest.fixture
def quickbooks_profit_and_loss() -> dict:
    return _load("quickbooks_profit_and_loss.json")


@pytest.fixture
def quickbooks_balance_sheet() -> dict:
    return _load("quickbooks_balance_sheet.json")


@pytest.fixture
def xero_profit_and_loss() -> dict:
    return _load("xero_profit_and_loss.json")


@pytest.fixture
def xero_bank_accounts() -> dict:
    return _load("xero_bank_accounts.json")


class FakeQuickBooksFetcher:
    """In-memory QuickBooks fetcher recording every call."""

    def __init__(self, profit_and_loss: dict, balance_sheet: dict, fail: Optional[str] = None):
        self.profit_and_loss = profit_and_loss
        self.balance_sheet = balance_sheet
        self.fail = fail
        self.calls: list[tuple[str, Any]] = []

    async def fetch_profit_and_loss(self, realm_id: str, period: DateRange) -> dict:
        self.calls.append(("profit_and_loss", period))
        if self.fail == "profit_and_loss":
            raise RuntimeError("401 Unauthorized")
        return self.profit_and_loss

    async def fetch_balance_sheet(self, realm_id: str, as_of: date) -> dict:
        self.calls.append(("balance_sheet", as_of))
        if self.fail == "balance_sheet":
            raise RuntimeError("503 Service Unavailable")
        return self.balance_sheet


class FakeXeroFetcher:
    """In-memory Xero fetcher recording every call."""

    def __init__(self, profit_and_loss: dict, bank_accounts: dict, fail: Optional[str] = None):
        self.profit_and_loss = profit_and_loss
        self.bank_accounts = bank_accounts
        self.fail = fail
        self.calls: list[tuple[str, Any]] = []

    async def fetch_profit_and_loss(self, tenant_id: str, period: DateRange) -> dict:
        self.calls.append(("profit_and_loss", period))
        if self.fail == "profit_and_loss":
            raise RuntimeError("401 Unauthorized")
        return self.profit_and_loss

    async def fetch_balance_sheet(self, tenant_id: str, as_of: date) -> dict:
        self.calls.append(("balance_sheet", as_of))
        return {"Reports": []}

    async def fetch_bank_accounts(self, tenant_id: str) -> dict:
        self.calls.append(("bank_accounts", None))
        if self.fail == "bank_accounts":
            raise RuntimeError("connection reset")
        return self.bank_accounts


class StubNarrativeGenerator:
    """Narrative generator returning canned text, or failing on demand."""

    def __init__(self, text: str = "Looks steady.", error: Optional[Exception] = None, delays=None):
        self.text = text
        self.error = error
        self.delays = delays or {}
        self.contexts: list[PromptContext] = []
        self.completed: list[str] = []

    async def generate_text(self, context: PromptContext) -> str:
        self.contexts.append(context)
        for marker, delay in self.delays.items():
            if marker in context.user_prompt:
                await asyncio.sleep(delay)
                self.completed.append(marker)
                break
        if self.error is not None:
            raise self.error
        return self.text


@pytest.fixture
def quickbooks_fetcher(quickbooks_profit_and_loss, quickbooks_balance_sheet) -> FakeQuickBooksFetcher:
    return FakeQuickBooksFetcher(quickbooks_profit_and_loss, quickbooks_balance_sheet)


@pytest.fixture
def xero_fetcher(xero_profit_and_loss, xero_bank_accounts) -> FakeXeroFetcher:
    return FakeXeroFetcher(xero_profit_and_loss, xero_bank_accounts)
