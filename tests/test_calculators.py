import pytest

from cashlens.insights.calculators import (
    PROFITABLE_RUNWAY_MONTHS,
    BurnRateCalculator,
    HiringImpactCalculator,
    ProfitabilityCalculator,
    Runway,
    RunwayCalculator,
)
from cashlens.metrics.schemas import CanonicalMetrics


def _metrics(cash: float, revenue: float, expenses: float) -> CanonicalMetrics:
    return CanonicalMetrics(cash_balance=cash, monthly_revenue=revenue, monthly_expenses=expenses)


def test_runway_is_floor_of_cash_over_net_burn():
    payload = RunwayCalculator.calculate(_metrics(50000, 15000, 20000))
    assert payload["netBurn"] == 5000
    assert payload["runwayMonths"] == 10


def test_runway_rounds_down_partial_months():
    payload = RunwayCalculator.calculate(_metrics(59999, 15000, 20000))
    assert payload["runwayMonths"] == 11


@pytest.mark.parametrize(
    "cash, revenue, expenses",
    [
        (50000, 20000, 20000),
        (50000, 30000, 20000),
        (0, 30000, 20000),
        (-1000, 30000, 20000),
        (10 ** 9, 1, 0),
    ],
)
def test_not_burning_cash_reports_sentinel_regardless_of_cash(cash, revenue, expenses):
    payload = RunwayCalculator.calculate(_metrics(cash, revenue, expenses))
    assert payload["runwayMonths"] == PROFITABLE_RUNWAY_MONTHS == 999


def test_runway_value_object():
    assert Runway.profitable().is_profitable
    assert Runway.profitable().months == 999
    assert Runway.profitable().describe() == "infinite (profitable)"
    assert Runway.finite(7).months == 7
    assert Runway.finite(7).describe() == "7 months"


def test_net_burn_negative_when_profitable():
    assert RunwayCalculator.calculate_net_burn(7000, 10000) == -3000


def test_burn_rate_payload():
    payload = BurnRateCalculator.calculate(_metrics(1, 10000, 12500.5))
    assert payload == {"monthlyRevenue": 10000, "monthlyExpenses": 12500.5, "netBurn": 2500.5}


def test_profit_margin_percentage():
    assert ProfitabilityCalculator.calculate_profit_margin(10000, 7000) == 30.0


def test_profit_margin_negative_when_losing_money():
    assert ProfitabilityCalculator.calculate_profit_margin(10000, 12500) == -25.0


def test_profit_margin_zero_without_revenue():
    assert ProfitabilityCalculator.calculate_profit_margin(0, 7000) == 0.0
    payload = ProfitabilityCalculator.calculate(_metrics(1, 0, 7000))
    assert payload["profitMargin"] == 0.0


def test_hiring_impact_projects_new_runway():
    metrics = _metrics(120000, 15000, 20000)
    impact = HiringImpactCalculator.calculate(metrics, 60000)

    assert impact.monthly_cost == 5000
    assert impact.new_monthly_expenses == 25000
    assert impact.current_runway.months == 24
    assert impact.new_runway.months == 12
    assert impact.to_payload() == {
        "currentRunway": 24,
        "newRunway": 12,
        "annualSalary": 60000,
        "monthlyCost": 5000,
        "currentMonthlyExpenses": 20000,
        "newMonthlyExpenses": 25000,
    }


def test_hiring_impact_keeps_sentinel_when_still_profitable():
    impact = HiringImpactCalculator.calculate(_metrics(10000, 50000, 20000), 120000)
    assert impact.current_runway.months == 999
    assert impact.new_runway.months == 999


def test_hiring_impact_turns_profitable_business_into_burning_one():
    impact = HiringImpactCalculator.calculate(_metrics(30000, 20000, 19000), 36000)
    assert impact.current_runway.is_profitable
    assert impact.new_net_burn == 2000
    assert impact.new_runway.months == 15


def test_hiring_impact_is_idempotent_and_does_not_mutate_metrics():
    metrics = _metrics(120000, 15000, 20000)
    before = metrics.model_dump()

    first = HiringImpactCalculator.calculate(metrics, 85000)
    second = HiringImpactCalculator.calculate(metrics, 85000)

    assert (first.current_runway, first.new_runway) == (second.current_runway, second.new_runway)
    assert first.to_payload() == second.to_payload()
    assert metrics.model_dump() == before


def test_canonical_metrics_are_frozen():
    metrics = _metrics(1, 2, 3)
    with pytest.raises(Exception):
        metrics.monthly_expenses = 10
