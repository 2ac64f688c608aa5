import pytest

from cashlens.insights.calculators import HiringImpactCalculator
from cashlens.insights.prompts import format_money, hiring_impact_prompt
from cashlens.metrics.schemas import CanonicalMetrics


@pytest.mark.parametrize(
    "value, expected",
    [
        (85000, "85,000"),
        (85000.0, "85,000"),
        (85000.5, "85,000.5"),
        (85000.25, "85,000.25"),
        (1234.5678, "1,234.568"),
        (-6499.5, "-6,499.5"),
        (0, "0"),
    ],
)
def test_format_money(value, expected):
    assert format_money(value) == expected


def test_hiring_prompt_quotes_salary_and_runways():
    metrics = CanonicalMetrics(cash_balance=120000, monthly_revenue=15000, monthly_expenses=20000)
    impact = HiringImpactCalculator.calculate(metrics, 60000)

    context = hiring_impact_prompt(metrics, impact)

    assert context.extended is True
    assert "Annual salary: $60,000" in context.user_prompt
    assert "Current runway: 24 months" in context.user_prompt
    assert "New runway: 12 months" in context.user_prompt
