"""
Test suite for expense timelines, calendar and breakdown
"""

import pytest
from datetime import date
from decimal import Decimal

from ledgerview.expense import (
    by_expense_group,
    calendar_data,
    create_expense_tooltip_content,
    current_expenses_breakdown,
    expense_group,
    monthly_expenses_timeline,
    pie_data,
    yearly_trend,
)
from ledgerview.models import Posting


def posting(day, account, amount, payee=''):
    return Posting(date=day, account=account, amount=Decimal(amount), payee=payee)


@pytest.fixture
def expenses():
    return [
        posting(date(2023, 11, 10), 'Expenses:Food', '100'),
        posting(date(2023, 12, 5), 'Expenses:Rent', '1000'),
        posting(date(2024, 1, 3), 'Expenses:Food', '200', 'Grocer'),
        posting(date(2024, 1, 3), 'Expenses:Food:Snacks', '50', 'Bakery'),
        posting(date(2024, 1, 20), 'Expenses:Travel', '600', 'Airline'),
        posting(date(2024, 1, 25), 'Expenses:Shopping', '-80', 'Refund'),
    ]


class TestGrouping:
    """Test category grouping"""

    def test_group_is_second_segment(self):
        assert expense_group(posting(date(2024, 1, 1), 'Expenses:Food:Snacks', '1')) == 'Food'

    def test_by_expense_group(self, expenses):
        categories = by_expense_group(expenses)
        assert categories['Food'].total == Decimal('350')
        assert len(categories['Food'].postings) == 3

    def test_pie_data_largest_first(self, expenses):
        assert [c.category for c in pie_data(expenses)] == ['Rent', 'Travel', 'Food', 'Shopping']


class TestYearlyTrend:
    """Test monthly averages per year"""

    def test_partial_years(self, expenses):
        trend = yearly_trend(expenses, ['Food', 'Rent', 'Shopping', 'Travel'])

        # 2023 covers Nov and Dec, 2024 only Jan
        assert trend[2023]['Food'] == Decimal('50')
        assert trend[2023]['Rent'] == Decimal('500')
        assert trend[2023]['Travel'] == Decimal('0')
        assert trend[2024]['Food'] == Decimal('250')
        assert trend[2024]['Shopping'] == Decimal('-80')

    def test_full_year_divides_by_twelve(self):
        postings = [
            posting(date(2022, 6, 1), 'Expenses:Rent', '10'),
            posting(date(2023, 3, 1), 'Expenses:Rent', '1200'),
            posting(date(2024, 2, 1), 'Expenses:Rent', '10'),
        ]
        assert yearly_trend(postings, ['Rent'])[2023]['Rent'] == Decimal('100')


class TestMonthlyExpenses:
    """Test the stacked monthly timeline"""

    def test_months_and_values(self, expenses):
        timeline = monthly_expenses_timeline(expenses)

        assert timeline.labels == ['Nov-2023', 'Dec-2023', 'Jan-2024']
        assert [s.key for s in timeline.series] == ['Food', 'Rent', 'Shopping', 'Travel']
        food = timeline.series[0]
        assert food.values == [Decimal('100'), Decimal('0'), Decimal('250')]

    def test_trend_follows_year(self, expenses):
        timeline = monthly_expenses_timeline(expenses)
        assert timeline.trend == [Decimal('550'), Decimal('550'), Decimal('770')]

    def test_group_filter(self, expenses):
        timeline = monthly_expenses_timeline(expenses, ['Food'])

        assert [s.key for s in timeline.series] == ['Food']
        assert timeline.trend == [Decimal('50'), Decimal('50'), Decimal('250')]
        assert [legend.selected for legend in timeline.legends] == [True, False, False, False]

    def test_date_range(self, expenses):
        timeline = monthly_expenses_timeline(
            expenses, date_range=(date(2023, 12, 1), date(2024, 1, 31)))

        assert timeline.labels == ['Dec-2023', 'Jan-2024']
        assert timeline.customdata == ['2023-12', '2024-01']

    def test_empty(self):
        assert monthly_expenses_timeline([]).is_empty


class TestExpenseTooltip:
    """Test monthly hover text"""

    def test_positive_allowed_postings_only(self, expenses):
        january = expenses[2:]
        text = create_expense_tooltip_content(january, ['Food', 'Travel', 'Shopping'])
        lines = text.split('<br>')

        assert lines[0] == '<b>Jan 2024</b>'
        assert lines[1] == 'Travel  <b>₹600.00</b>'
        assert lines[2] == 'Food  <b>₹250.00</b>'
        assert lines[-1] == 'Total  <b>₹850.00</b>'

    def test_truncation_after_fifteen(self):
        postings = [posting(date(2024, 1, 1), f'Expenses:Cat{i:02d}', '1') for i in range(17)]
        text = create_expense_tooltip_content(postings, [f'Cat{i:02d}' for i in range(17)])
        assert '... and 2 more categories' in text


class TestCalendar:
    """Test the month heatmap"""

    @pytest.fixture
    def january(self):
        return [
            posting(date(2024, 1, 3), 'Expenses:Food', '200', 'Grocer'),
            posting(date(2024, 1, 20), 'Expenses:Travel', '600', 'Airline'),
        ]

    def test_grid(self, january):
        days = calendar_data('2024-01', january)

        assert len(days) == 35
        assert days[0].date == date(2023, 12, 31)
        assert not days[0].visible
        assert days[1].visible

    def test_opacity_scales_linearly(self, january):
        days = {d.date: d for d in calendar_data('2024-01', january)}

        assert days[date(2024, 1, 20)].alpha == pytest.approx(1.0)
        assert days[date(2024, 1, 3)].alpha == pytest.approx(0.3 + 0.7 / 3)
        assert days[date(2024, 1, 4)].alpha == pytest.approx(0.3)

    def test_degenerate_domain(self):
        days = calendar_data('2024-01', [])
        assert all(d.alpha == pytest.approx(0.65) for d in days)

    def test_labels_and_slices(self, january):
        days = {d.date: d for d in calendar_data('2024-01', january)}

        assert days[date(2024, 1, 20)].label == '600'
        assert days[date(2024, 1, 4)].label == ''
        assert [s.category for s in days[date(2024, 1, 3)].slices] == ['Food']
        assert 'Grocer' in days[date(2024, 1, 3)].hover

    def test_group_filter(self, january):
        days = {d.date: d for d in calendar_data('2024-01', january, ['Food'])}
        assert days[date(2024, 1, 20)].total == Decimal('0')


class TestBreakdown:
    """Test the per-category bars of one month"""

    def test_sorted_ascending_with_share(self):
        postings = [
            posting(date(2024, 1, 3), 'Expenses:Food', '200'),
            posting(date(2024, 1, 20), 'Expenses:Travel', '600'),
        ]
        timeline = current_expenses_breakdown(postings)

        assert timeline.labels == ['Food', 'Travel']
        assert timeline.series[0].text == ['₹200.00  25.00%', '₹600.00  75.00%']
        assert timeline.height == 40
        assert len(timeline.series[0].colors) == 2

    def test_empty(self):
        assert current_expenses_breakdown([]).is_empty
