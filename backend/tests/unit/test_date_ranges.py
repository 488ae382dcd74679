from datetime import date, datetime

from app.utils.date_ranges import (
    add_months,
    combine,
    day_name,
    month_bounds,
    previous_month_bounds,
    previous_week_bounds,
    previous_year_bounds,
    week_bounds,
    week_of_month,
    year_bounds,
)


class TestWeekBounds:
    def test_monday_start_sunday_end(self) -> None:
        start, end = week_bounds(date(2024, 7, 10))

        assert start == datetime(2024, 7, 8, 0, 0)
        assert end == datetime(2024, 7, 14, 23, 59, 59, 999000)

    def test_sunday_belongs_to_preceding_monday(self) -> None:
        start, _ = week_bounds(date(2024, 7, 14))
        assert start.date() == date(2024, 7, 8)

    def test_previous_week(self) -> None:
        start, end = previous_week_bounds(date(2024, 7, 10))
        assert (start.date(), end.date()) == (date(2024, 7, 1), date(2024, 7, 7))


class TestMonthBounds:
    def test_leap_february(self) -> None:
        start, end = month_bounds(date(2024, 2, 15))

        assert start == datetime(2024, 2, 1)
        assert end.date() == date(2024, 2, 29)

    def test_december_rolls_year(self) -> None:
        _, end = month_bounds(date(2023, 12, 3))
        assert end.date() == date(2023, 12, 31)

    def test_previous_month_from_january(self) -> None:
        start, end = previous_month_bounds(date(2024, 1, 20))
        assert (start.date(), end.date()) == (date(2023, 12, 1), date(2023, 12, 31))

    def test_add_months_clamps_day(self) -> None:
        assert add_months(date(2024, 1, 31), 1) == date(2024, 2, 29)
        assert add_months(date(2023, 1, 31), 1) == date(2023, 2, 28)
        assert add_months(date(2024, 3, 31), -1) == date(2024, 2, 29)


class TestYearAndHelpers:
    def test_year_bounds(self) -> None:
        start, end = year_bounds(date(2024, 7, 10))
        assert start == datetime(2024, 1, 1)
        assert end.date() == date(2024, 12, 31)

    def test_previous_year(self) -> None:
        start, _ = previous_year_bounds(date(2024, 7, 10))
        assert start == datetime(2023, 1, 1)

    def test_day_name_and_combine(self) -> None:
        assert day_name(date(2024, 7, 10)) == "Wednesday"
        assert combine(date(2024, 7, 10), "17:45") == datetime(2024, 7, 10, 17, 45)

    def test_week_of_month_buckets(self) -> None:
        assert week_of_month(date(2024, 7, 1)) == 1
        assert week_of_month(date(2024, 7, 7)) == 1
        assert week_of_month(date(2024, 7, 8)) == 2
        assert week_of_month(date(2024, 7, 31)) == 5
