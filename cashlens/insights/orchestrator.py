"""
Insight Orchestrator
Validates an insight request, builds canonical metrics, derives the
numeric payload for each requested kind and attaches narrative text.

Request stages: RECEIVED -> METRICS_BUILT -> DERIVED -> NARRATED -> PACKAGED
"""

import asyncio
import logging
import math
from dataclasses import dataclass
from typing import Any, Optional, Protocol

from cashlens.core.exceptions import InvalidInsightRequestError
from cashlens.insights import prompts
from cashlens.insights.calculators import (
    BurnRateCalculator,
    HiringImpactCalculator,
    ProfitabilityCalculator,
    RunwayCalculator,
)
from cashlens.insights.narrative import NarrativeGenerator, narrate
from cashlens.insights.schemas import (
    STANDARD_KINDS,
    InsightKind,
    InsightRequest,
    InsightResult,
    InsightStage,
)
from cashlens.metrics.builder import MetricsBuilder
from cashlens.metrics.schemas import CanonicalMetrics

logger = logging.getLogger(__name__)


class InsightSink(Protocol):
    """Receives each packaged insight, e.g. for persistence."""

    async def save(self, result: InsightResult) -> None:
        ...


@dataclass(frozen=True)
class Derivation:
    """Numbers and prompt for one insight, before narration."""
    title: str
    payload: dict[str, Any]
    prompt: prompts.PromptContext


def validate_request(request: InsightRequest) -> None:
    """
    Check kind-specific parameters before any work starts.

    Raises:
        InvalidInsightRequestError: If hiring_impact lacks a positive, finite salary
            or custom lacks a question
    """
    if request.kind == InsightKind.HIRING_IMPACT:
        salary = request.annual_salary
        if salary is None or not math.isfinite(salary) or salary <= 0:
            raise InvalidInsightRequestError(
                "Annual salary required for hiring impact", field="annualSalary"
            )

    if request.kind == InsightKind.CUSTOM:
        if not request.question or not request.question.strip():
            raise InvalidInsightRequestError(
                "Question required for custom insight", field="question"
            )


class InsightDeriver:
    """Derives the payload, title and prompt for each insight kind."""

    @staticmethod
    def cash_runway(metrics: CanonicalMetrics, request: InsightRequest) -> Derivation:
        payload = RunwayCalculator.calculate(metrics)
        runway = RunwayCalculator.calculate_runway(metrics.cash_balance, payload["netBurn"])
        return Derivation(
            title="Cash Runway",
            payload=payload,
            prompt=prompts.cash_runway_prompt(metrics, payload["netBurn"], runway),
        )

    @staticmethod
    def burn_rate(metrics: CanonicalMetrics, request: InsightRequest) -> Derivation:
        payload = BurnRateCalculator.calculate(metrics)
        return Derivation(
            title="Monthly Spending",
            payload=payload,
            prompt=prompts.burn_rate_prompt(metrics, payload["netBurn"]),
        )

    @staticmethod
    def profit_margin(metrics: CanonicalMetrics, request: InsightRequest) -> Derivation:
        payload = ProfitabilityCalculator.calculate(metrics)
        return Derivation(
            title="Profit Margin",
            payload=payload,
            prompt=prompts.profit_margin_prompt(metrics, payload["profitMargin"]),
        )

    @staticmethod
    def hiring_impact(metrics: CanonicalMetrics, request: InsightRequest) -> Derivation:
        impact = HiringImpactCalculator.calculate(metrics, request.annual_salary)
        return Derivation(
            title=f"Hiring Impact (${prompts.format_money(impact.annual_salary)}/year)",
            payload=impact.to_payload(),
            prompt=prompts.hiring_impact_prompt(metrics, impact),
        )

    @staticmethod
    def custom(metrics: CanonicalMetrics, request: InsightRequest) -> Derivation:
        return Derivation(
            title=request.question,
            payload=metrics.to_payload(),
            prompt=prompts.custom_question_prompt(metrics, request.question),
        )

    @classmethod
    def derive(cls, kind: InsightKind, metrics: CanonicalMetrics, request: InsightRequest) -> Derivation:
        derivers = {
            InsightKind.CASH_RUNWAY: cls.cash_runway,
            InsightKind.BURN_RATE: cls.burn_rate,
            InsightKind.PROFIT_MARGIN: cls.profit_margin,
            InsightKind.HIRING_IMPACT: cls.hiring_impact,
            InsightKind.CUSTOM: cls.custom,
        }
        return derivers[kind](metrics, request)


class InsightOrchestrator:
    """
    Produces packaged insights for one account.

    Canonical metrics are rebuilt on every call. Results are handed to the
    sink as soon as they are packaged and are not retained.
    """

    def __init__(
        self,
        metrics_builder: MetricsBuilder,
        narrative_generator: NarrativeGenerator,
        sink: Optional[InsightSink] = None,
    ):
        self.metrics_builder = metrics_builder
        self.narrative_generator = narrative_generator
        self.sink = sink

    async def generate(self, request: InsightRequest, account_id: str) -> list[InsightResult]:
        """
        Generate insights for an account.

        Args:
            request: Insight kind plus scenario parameters
            account_id: Provider account (QuickBooks realm or Xero tenant)

        Returns:
            One result, or three in fixed order for kind=all

        Raises:
            InvalidInsightRequestError: Before any fetch, if parameters are missing
            SourceDataUnavailableError: If the metrics build fails
        """
        self._log_stage(InsightStage.RECEIVED, request.kind)
        validate_request(request)

        snapshot = await self.metrics_builder.build(account_id)
        self._log_stage(InsightStage.METRICS_BUILT, request.kind)

        results = await self.generate_from_metrics(request, snapshot.metrics)

        for result in results:
            await self._deliver(result)

        return results

    async def generate_from_metrics(
        self,
        request: InsightRequest,
        metrics: CanonicalMetrics,
    ) -> list[InsightResult]:
        """
        Generate insights from already-built canonical metrics.

        kind=all runs cash_runway, burn_rate and profit_margin concurrently
        and returns them in that order regardless of completion order.
        """
        validate_request(request)

        if request.kind == InsightKind.ALL:
            results = await asyncio.gather(
                *(self._produce(kind, metrics, request) for kind in STANDARD_KINDS)
            )
            return list(results)

        return [await self._produce(request.kind, metrics, request)]

    async def _produce(
        self,
        kind: InsightKind,
        metrics: CanonicalMetrics,
        request: InsightRequest,
    ) -> InsightResult:
        derivation = InsightDeriver.derive(kind, metrics, request)
        self._log_stage(InsightStage.DERIVED, kind)

        text = await narrate(self.narrative_generator, derivation.prompt)
        self._log_stage(InsightStage.NARRATED, kind)

        result = InsightResult(
            kind=kind,
            title=derivation.title,
            narrative_text=text,
            numeric_payload=derivation.payload,
        )
        self._log_stage(InsightStage.PACKAGED, kind)
        return result

    async def _deliver(self, result: InsightResult) -> None:
        if self.sink is None:
            return
        try:
            await self.sink.save(result)
        except Exception as e:
            logger.error("Failed to save %s insight: %s", result.kind.value, e)

    @staticmethod
    def _log_stage(stage: InsightStage, kind: InsightKind) -> None:
        logger.debug("Insight %s: %s", kind.value, stage.value)
