"""
Derivation calculators: net burn, runway, profit margin and hiring impact.

All calculators are pure functions over frozen CanonicalMetrics.
"""

import math
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Optional

from cashlens.metrics.schemas import CanonicalMetrics

# Runway reported for a business that is not burning cash
PROFITABLE_RUNWAY_MONTHS = 999


def _dec(value: float) -> Decimal:
    return Decimal(str(value))


@dataclass(frozen=True)
class Runway:
    """
    Months of operation left at the current net burn.

    Either a finite number of months or "profitable". Only serialized to
    the 999 sentinel at the payload boundary.
    """
    finite_months: Optional[int] = None

    @classmethod
    def finite(cls, months: int) -> "Runway":
        return cls(finite_months=months)

    @classmethod
    def profitable(cls) -> "Runway":
        return cls(finite_months=None)

    @property
    def is_profitable(self) -> bool:
        return self.finite_months is None

    @property
    def months(self) -> int:
        """Runway as an integer, PROFITABLE_RUNWAY_MONTHS when not burning."""
        if self.finite_months is None:
            return PROFITABLE_RUNWAY_MONTHS
        return self.finite_months

    def describe(self, profitable_text: str = "infinite (profitable)") -> str:
        if self.is_profitable:
            return profitable_text
        return f"{self.finite_months} months"


class RunwayCalculator:
    """
    Calculates net burn and cash runway.

    Net burn = expenses - revenue; positive means cash is being consumed.
    """

    @staticmethod
    def calculate_net_burn(monthly_expenses: float, monthly_revenue: float) -> float:
        """
        Calculate monthly net burn.

        Returns:
            Net burn (positive = burning cash, zero or negative = not burning)
        """
        return float(_dec(monthly_expenses) - _dec(monthly_revenue))

    @staticmethod
    def calculate_runway(cash_balance: float, net_burn: float) -> Runway:
        """
        Calculate runway in whole months (floor division).

        Args:
            cash_balance: Current cash balance
            net_burn: Monthly net burn

        Returns:
            Finite runway when burning cash, otherwise profitable
        """
        if net_burn <= 0:
            return Runway.profitable()

        return Runway.finite(math.floor(_dec(cash_balance) / _dec(net_burn)))

    @staticmethod
    def calculate(metrics: CanonicalMetrics) -> dict[str, Any]:
        """
        Calculate runway payload for the cash runway insight.

        Returns:
            Dictionary with cash, revenue, expenses, net burn and runway months
        """
        net_burn = RunwayCalculator.calculate_net_burn(
            metrics.monthly_expenses, metrics.monthly_revenue
        )
        runway = RunwayCalculator.calculate_runway(metrics.cash_balance, net_burn)

        return {
            "cashBalance": metrics.cash_balance,
            "monthlyRevenue": metrics.monthly_revenue,
            "monthlyExpenses": metrics.monthly_expenses,
            "netBurn": net_burn,
            "runwayMonths": runway.months,
        }


class BurnRateCalculator:
    """Calculates the monthly spending payload."""

    @staticmethod
    def calculate(metrics: CanonicalMetrics) -> dict[str, Any]:
        return {
            "monthlyRevenue": metrics.monthly_revenue,
            "monthlyExpenses": metrics.monthly_expenses,
            "netBurn": RunwayCalculator.calculate_net_burn(
                metrics.monthly_expenses, metrics.monthly_revenue
            ),
        }


class ProfitabilityCalculator:
    """Calculates profit margin as a percentage of revenue."""

    @staticmethod
    def calculate_profit_margin(monthly_revenue: float, monthly_expenses: float) -> float:
        """
        Share of revenue kept after expenses, in percent.

        Returns 0.0 when there is no revenue.
        """
        if monthly_revenue <= 0:
            return 0.0

        revenue = _dec(monthly_revenue)
        return float((revenue - _dec(monthly_expenses)) / revenue * 100)

    @staticmethod
    def calculate(metrics: CanonicalMetrics) -> dict[str, Any]:
        return {
            "monthlyRevenue": metrics.monthly_revenue,
            "monthlyExpenses": metrics.monthly_expenses,
            "profitMargin": ProfitabilityCalculator.calculate_profit_margin(
                metrics.monthly_revenue, metrics.monthly_expenses
            ),
        }


@dataclass(frozen=True)
class HiringImpact:
    """What-if comparison of runway before and after a hire."""
    annual_salary: float
    monthly_cost: float
    current_monthly_expenses: float
    new_monthly_expenses: float
    current_net_burn: float
    new_net_burn: float
    current_runway: Runway
    new_runway: Runway

    def to_payload(self) -> dict[str, Any]:
        return {
            "currentRunway": self.current_runway.months,
            "newRunway": self.new_runway.months,
            "annualSalary": self.annual_salary,
            "monthlyCost": self.monthly_cost,
            "currentMonthlyExpenses": self.current_monthly_expenses,
            "newMonthlyExpenses": self.new_monthly_expenses,
        }


class HiringImpactCalculator:
    """
    Projects runway under an additional salary.

    The canonical metrics are never modified; the projection is a second,
    independent set of indicators.
    """

    @staticmethod
    def calculate(metrics: CanonicalMetrics, annual_salary: float) -> HiringImpact:
        """
        Calculate hiring impact.

        Args:
            metrics: Canonical metrics
            annual_salary: Proposed annual salary

        Returns:
            HiringImpact with current and projected runway
        """
        monthly_cost = float(_dec(annual_salary) / 12)
        new_monthly_expenses = float(_dec(metrics.monthly_expenses) + _dec(monthly_cost))

        current_net_burn = RunwayCalculator.calculate_net_burn(
            metrics.monthly_expenses, metrics.monthly_revenue
        )
        new_net_burn = RunwayCalculator.calculate_net_burn(
            new_monthly_expenses, metrics.monthly_revenue
        )

        return HiringImpact(
            annual_salary=annual_salary,
            monthly_cost=monthly_cost,
            current_monthly_expenses=metrics.monthly_expenses,
            new_monthly_expenses=new_monthly_expenses,
            current_net_burn=current_net_burn,
            new_net_burn=new_net_burn,
            current_runway=RunwayCalculator.calculate_runway(metrics.cash_balance, current_net_burn),
            new_runway=RunwayCalculator.calculate_runway(metrics.cash_balance, new_net_burn),
        )
