"""
Insight Prompts
Builds the prompt context handed to the narrative generator for each insight kind.

Prompts only ever quote numbers that are also in the insight's numeric payload.
"""

from dataclasses import dataclass

from cashlens.insights.calculators import HiringImpact, Runway
from cashlens.metrics.schemas import CanonicalMetrics

ADVISOR_SYSTEM_PROMPT = (
    "You are a financial advisor who explains complex financial concepts "
    "in plain English to small business owners."
)
HIRING_SYSTEM_PROMPT = (
    "You are a financial advisor who helps small business owners make "
    "practical hiring decisions."
)
QUESTION_SYSTEM_PROMPT = (
    "You are a helpful financial advisor who answers questions in plain English."
)


@dataclass(frozen=True)
class PromptContext:
    """Everything the narrative generator needs for one completion."""
    system_prompt: str
    user_prompt: str
    extended: bool = False  # hiring and custom answers get a longer completion


def format_money(value: float) -> str:
    """Format an amount with thousands separators and at most three decimals, no trailing zeros."""
    if float(value).is_integer():
        return f"{int(value):,}"
    return f"{value:,.3f}".rstrip("0").rstrip(".")


def _metrics_lines(metrics: CanonicalMetrics, include_cash: bool = True) -> str:
    lines = []
    if include_cash:
        lines.append(f"- Cash balance: ${format_money(metrics.cash_balance)}")
    lines.append(f"- Monthly revenue: ${format_money(metrics.monthly_revenue)}")
    lines.append(f"- Monthly expenses: ${format_money(metrics.monthly_expenses)}")
    return "\n".join(lines)


def cash_runway_prompt(metrics: CanonicalMetrics, net_burn: float, runway: Runway) -> PromptContext:
    user_prompt = f"""You are a financial advisor explaining cash runway to a small business owner (non-VC-backed).

Financial data:
{_metrics_lines(metrics)}
- Net monthly burn: ${format_money(net_burn)}
- Calculated runway: {runway.describe()}

Generate a plain-English explanation (2-3 sentences) that:
1. States the runway in months (or "you're profitable" if infinite)
2. Explains what this means practically
3. Gives context (is this good/bad? should they worry?)

Use simple language. NO jargon like "burn rate" or "runway" without explaining it first.
Be direct and honest. This is their real business."""
    return PromptContext(system_prompt=ADVISOR_SYSTEM_PROMPT, user_prompt=user_prompt)


def burn_rate_prompt(metrics: CanonicalMetrics, net_burn: float) -> PromptContext:
    user_prompt = f"""You are a financial advisor explaining spending patterns to a small business owner.

Financial data:
{_metrics_lines(metrics, include_cash=False)}
- Net monthly burn: ${format_money(net_burn)}

Generate a plain-English explanation (2-3 sentences) that:
1. States how much they're spending per month
2. Compares it to their revenue (spending more or less than they make?)
3. Identifies if this is sustainable or concerning

Use simple language. Avoid jargon. Be direct."""
    return PromptContext(system_prompt=ADVISOR_SYSTEM_PROMPT, user_prompt=user_prompt)


def profit_margin_prompt(metrics: CanonicalMetrics, profit_margin: float) -> PromptContext:
    user_prompt = f"""You are a financial advisor explaining profit margins to a small business owner.

Financial data:
{_metrics_lines(metrics, include_cash=False)}
- Profit margin: {profit_margin:.1f}%

Generate a plain-English explanation (2-3 sentences) that:
1. States the profit margin percentage
2. Explains what this means (how much of every dollar they keep)
3. Gives context (is this healthy? industry benchmarks if relevant)

Use simple language. Explain like talking to a friend, not an accountant."""
    return PromptContext(system_prompt=ADVISOR_SYSTEM_PROMPT, user_prompt=user_prompt)


def hiring_impact_prompt(metrics: CanonicalMetrics, impact: HiringImpact) -> PromptContext:
    user_prompt = f"""You are a financial advisor helping a small business owner decide if they can afford to hire.

Current situation:
{_metrics_lines(metrics)}
- Current runway: {impact.current_runway.describe()}

Hiring scenario:
- Annual salary: ${format_money(impact.annual_salary)}
- Monthly cost: ${format_money(impact.monthly_cost)}
- New monthly expenses: ${format_money(impact.new_monthly_expenses)}
- New runway: {impact.new_runway.describe("infinite (still profitable)")}

Generate a plain-English recommendation (3-4 sentences) that:
1. States how the hire changes their runway
2. Explains the financial impact clearly
3. Gives honest advice (can they afford it? should they wait? is it safe?)

Be direct and practical. This is a real hiring decision."""
    return PromptContext(system_prompt=HIRING_SYSTEM_PROMPT, user_prompt=user_prompt, extended=True)


def custom_question_prompt(metrics: CanonicalMetrics, question: str) -> PromptContext:
    user_prompt = f"""You are a financial advisor answering questions for a small business owner.

Their financial data:
{_metrics_lines(metrics)}

Their question: "{question}"

Provide a clear, direct answer (3-4 sentences) using their actual numbers.
Be practical and honest. Use simple language."""
    return PromptContext(system_prompt=QUESTION_SYSTEM_PROMPT, user_prompt=user_prompt, extended=True)
