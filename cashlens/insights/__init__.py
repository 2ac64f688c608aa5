"""
Insights Module
Derives runway, burn, margin and hiring indicators from canonical metrics
and packages them with narrative text.
"""

from cashlens.insights.calculators import (
    PROFITABLE_RUNWAY_MONTHS,
    HiringImpactCalculator,
    ProfitabilityCalculator,
    Runway,
    RunwayCalculator,
)
from cashlens.insights.orchestrator import InsightOrchestrator

__all__ = [
    "PROFITABLE_RUNWAY_MONTHS",
    "Runway",
    "RunwayCalculator",
    "ProfitabilityCalculator",
    "HiringImpactCalculator",
    "InsightOrchestrator",
]
