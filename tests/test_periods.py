from datetime import date

from cashlens.metrics.periods import DateRange, as_of, current_month, prior_month


def test_current_month_runs_from_first_day_to_today():
    assert current_month(date(2026, 10, 19)) == DateRange(date(2026, 10, 1), date(2026, 10, 19))


def test_prior_month_is_full_previous_calendar_month():
    assert prior_month(date(2026, 10, 19)) == DateRange(date(2026, 9, 1), date(2026, 9, 30))


def test_prior_month_rolls_back_over_year_boundary():
    assert prior_month(date(2026, 1, 15)) == DateRange(date(2025, 12, 1), date(2025, 12, 31))


def test_prior_month_handles_leap_february():
    assert prior_month(date(2028, 3, 1)) == DateRange(date(2028, 2, 1), date(2028, 2, 29))


def test_first_of_month_current_window_is_single_day():
    window = current_month(date(2026, 5, 1))
    assert window.start == window.end == date(2026, 5, 1)


def test_as_of_is_the_reference_date():
    assert as_of(date(2026, 10, 19)) == date(2026, 10, 19)
