"""
Insights Router
API endpoint that generates insights for a connected accounting account.

Authentication and connection lookup belong to the caller: the request
carries the provider, an already-valid access token and the account id.
"""

import logging
from enum import Enum
from typing import Callable, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field

from cashlens.config import Settings, get_settings
from cashlens.core.errors import ErrorCode, create_error_response
from cashlens.insights.narrative import (
    NarrativeGenerator,
    OpenAINarrativeGenerator,
    UnavailableNarrativeGenerator,
)
from cashlens.insights.orchestrator import InsightOrchestrator, InsightSink
from cashlens.insights.schemas import InsightKind, InsightRequest, InsightResult
from cashlens.integrations.quickbooks import QuickBooksReportClient
from cashlens.integrations.xero import XeroReportClient
from cashlens.metrics.builder import (
    MetricsBuilder,
    QuickBooksMetricsBuilder,
    XeroMetricsBuilder,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/insights", tags=["Insights"])


class Provider(str, Enum):
    QUICKBOOKS = "quickbooks"
    XERO = "xero"


class InsightParams(BaseModel):
    """Scenario parameters for hiring and custom insights."""

    model_config = ConfigDict(populate_by_name=True)

    annual_salary: Optional[float] = Field(None, alias="annualSalary")
    question: Optional[str] = None


class GenerateInsightRequest(BaseModel):
    """Request body for insight generation."""

    model_config = ConfigDict(populate_by_name=True)

    provider: str = Field(..., description="quickbooks or xero")
    access_token: str = Field(..., alias="accessToken")
    account_id: str = Field(..., alias="accountId", description="QuickBooks realm id or Xero tenant id")
    insight_type: InsightKind = Field(..., alias="insightType")
    params: InsightParams = Field(default_factory=InsightParams)


class GenerateInsightResponse(BaseModel):
    """Either a single insight or, for insightType=all, a list."""

    insight: Optional[InsightResult] = None
    insights: Optional[list[InsightResult]] = None


MetricsBuilderFactory = Callable[[Provider, str], MetricsBuilder]


def get_metrics_builder_factory(
    settings: Settings = Depends(get_settings),
) -> MetricsBuilderFactory:
    """Build the provider-specific metrics builder for a request."""

    def factory(provider: Provider, access_token: str) -> MetricsBuilder:
        if provider == Provider.QUICKBOOKS:
            return QuickBooksMetricsBuilder(
                QuickBooksReportClient(settings.quickbooks_config(), access_token)
            )
        return XeroMetricsBuilder(
            XeroReportClient(settings.xero_config(), access_token)
        )

    return factory


def get_narrative_generator(
    settings: Settings = Depends(get_settings),
) -> NarrativeGenerator:
    config = settings.narrative_config()
    if not config.api_key:
        logger.warning("OPENAI_API_KEY is not configured, insights will use fallback text")
        return UnavailableNarrativeGenerator("OPENAI_API_KEY is not configured")
    return OpenAINarrativeGenerator(config)


def get_insight_sink() -> Optional[InsightSink]:
    """Persistence hook. Override to store generated insights."""
    return None


@router.post(
    "/generate",
    response_model=GenerateInsightResponse,
    response_model_exclude_none=True,
    summary="Generate financial insights",
    description="Fetch reports, derive metrics and generate one insight or all standard insights.",
)
async def generate_insights(
    body: GenerateInsightRequest,
    builder_factory: MetricsBuilderFactory = Depends(get_metrics_builder_factory),
    narrative_generator: NarrativeGenerator = Depends(get_narrative_generator),
    sink: Optional[InsightSink] = Depends(get_insight_sink),
) -> GenerateInsightResponse:
    """
    Generate insights.

    Errors are mapped by the global exception handler:
    - invalid request parameters -> 400
    - source data unavailable -> 502
    """
    try:
        provider = Provider(body.provider)
    except ValueError:
        raise create_error_response(ErrorCode.UNSUPPORTED_PROVIDER) from None

    orchestrator = InsightOrchestrator(
        metrics_builder=builder_factory(provider, body.access_token),
        narrative_generator=narrative_generator,
        sink=sink,
    )
    request = InsightRequest(
        kind=body.insight_type,
        annual_salary=body.params.annual_salary,
        question=body.params.question,
    )

    results = await orchestrator.generate(request, body.account_id)

    if request.kind == InsightKind.ALL:
        return GenerateInsightResponse(insights=results)
    return GenerateInsightResponse(insight=results[0])
