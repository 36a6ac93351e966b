"""
Tests for date helpers
"""

import pytest
from datetime import date
from unittest.mock import Mock, patch

from ledgerview.dates import (
    add_months,
    end_of_month,
    financial_year,
    for_each_month,
    month_days,
    month_key,
    month_label,
    now,
    parse_month,
)


class TestMonths:
    """Test month arithmetic"""

    def test_end_of_month_leap_year(self):
        assert end_of_month(date(2024, 2, 10)) == date(2024, 2, 29)
        assert end_of_month(date(2023, 2, 10)) == date(2023, 2, 28)

    def test_add_months_clamps_day(self):
        assert add_months(date(2024, 1, 31), 1) == date(2024, 2, 29)
        assert add_months(date(2024, 1, 15), -2) == date(2023, 11, 15)
        assert add_months(date(2024, 12, 1), 1) == date(2025, 1, 1)

    def test_for_each_month_is_inclusive(self):
        months = list(for_each_month(date(2023, 11, 15), date(2024, 2, 3)))
        assert months == [date(2023, 11, 1), date(2023, 12, 1), date(2024, 1, 1), date(2024, 2, 1)]

    def test_for_each_month_single(self):
        assert list(for_each_month(date(2024, 5, 2), date(2024, 5, 30))) == [date(2024, 5, 1)]

    def test_parse_month(self):
        assert parse_month('2024-03') == date(2024, 3, 1)

    @pytest.mark.parametrize('value', ['2024', '2024-13', 'March', '2024-03-01'])
    def test_parse_month_invalid(self, value):
        with pytest.raises(ValueError, match='expected YYYY-MM'):
            parse_month(value)

    def test_labels(self):
        assert month_key(date(2024, 3, 9)) == '2024-03'
        assert month_label(date(2024, 3, 9)) == 'Mar-2024'


class TestMonthDays:
    """Test the Sunday-first calendar grid"""

    def test_grid_is_whole_weeks(self):
        grid = month_days('2024-02')

        assert grid.days[0] == date(2024, 1, 28)  # Sunday
        assert grid.days[-1] == date(2024, 3, 2)  # Saturday
        assert len(grid.days) == 35

    def test_in_month(self):
        grid = month_days('2024-02')
        assert grid.in_month(date(2024, 2, 29))
        assert not grid.in_month(date(2024, 1, 31))

    def test_month_starting_on_sunday(self):
        grid = month_days('2024-09')
        assert grid.days[0] == date(2024, 9, 1)


class TestFinancialYear:
    """Test yearly card labels"""

    def test_label(self):
        assert financial_year(date(2023, 4, 1), date(2024, 3, 31)) == '2023 - 24'

    def test_century_rollover(self):
        assert financial_year(date(1999, 4, 1), date(2000, 3, 31)) == '1999 - 00'


class TestNow:
    """Test the pinned clock"""

    @patch('ledgerview.dates.get_config')
    def test_pinned(self, mock_config):
        mock_config.return_value = Mock(now='2024-05-06')
        assert now() == date(2024, 5, 6)

    @patch('ledgerview.dates.get_config')
    def test_today(self, mock_config):
        mock_config.return_value = Mock(now=None)
        assert now() == date.today()
