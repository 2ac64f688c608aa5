"""
Insights Schemas
Pydantic models for insight requests and results.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class InsightKind(str, Enum):
    """Insight kinds a caller can request."""

    CASH_RUNWAY = "cash_runway"
    BURN_RATE = "burn_rate"
    PROFIT_MARGIN = "profit_margin"
    HIRING_IMPACT = "hiring_impact"
    CUSTOM = "custom"
    ALL = "all"


# Produced for kind=all, in this order
STANDARD_KINDS = (
    InsightKind.CASH_RUNWAY,
    InsightKind.BURN_RATE,
    InsightKind.PROFIT_MARGIN,
)


class InsightStage(str, Enum):
    """Per-request processing stages, logged as a request advances."""

    RECEIVED = "received"
    METRICS_BUILT = "metrics_built"
    DERIVED = "derived"
    NARRATED = "narrated"
    PACKAGED = "packaged"


class InsightRequest(BaseModel):
    """A request for one insight kind, or all standard kinds."""

    model_config = ConfigDict(populate_by_name=True)

    kind: InsightKind = Field(..., description="Insight kind to generate")
    annual_salary: Optional[float] = Field(
        None, alias="annualSalary", description="Proposed annual salary for hiring_impact"
    )
    question: Optional[str] = Field(None, description="Owner's question for custom insights")


class InsightResult(BaseModel):
    """
    A packaged insight.

    numeric_payload holds exactly the numbers the narrative may reference
    and is always populated, even when narrative generation fails.
    """

    model_config = ConfigDict(populate_by_name=True)

    kind: InsightKind = Field(..., alias="type")
    title: str
    narrative_text: str = Field(..., alias="text")
    numeric_payload: dict[str, Any] = Field(..., alias="data")
    generated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        alias="generatedAt",
    )
