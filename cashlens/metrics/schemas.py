"""
Metrics Schemas
Canonical metrics shared by every provider and every insight.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class CanonicalMetrics(BaseModel):
    """
    The three-number reduction all insights are computed from.

    Values are in the account's native currency. Negative figures from
    unusual bookkeeping pass through unchanged.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    cash_balance: float = Field(0.0, alias="cashBalance", description="Cash as of today")
    monthly_revenue: float = Field(0.0, alias="monthlyRevenue", description="Revenue for the prior complete month")
    monthly_expenses: float = Field(0.0, alias="monthlyExpenses", description="Expenses for the prior complete month")

    def to_payload(self) -> dict[str, float]:
        return self.model_dump(by_alias=True)


class MetricsSnapshot(BaseModel):
    """Canonical metrics plus the raw reports they were read from."""

    model_config = ConfigDict(frozen=True)

    provider: str
    metrics: CanonicalMetrics
    profit_and_loss: dict[str, Any] = Field(default_factory=dict, description="Prior month P&L as fetched")
    balance_sheet: dict[str, Any] = Field(default_factory=dict, description="Balance sheet as of today as fetched")
    current_month_profit_and_loss: dict[str, Any] = Field(
        default_factory=dict,
        description="Month-to-date P&L, when the provider build fetches it",
    )
