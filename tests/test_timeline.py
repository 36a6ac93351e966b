"""
Tests for shared timeline helpers and legend selection
"""

from datetime import date
from decimal import Decimal

from ledgerview.models import Posting
from ledgerview.timeline import (
    BarSeries,
    Timeline,
    resolve_selection,
    sum_by_group,
    toggle_group,
    unique_sorted,
)


class TestSelection:
    """Test legend toggling"""

    def test_click_isolates_group(self):
        assert toggle_group(['Food', 'Rent'], ['Food', 'Rent'], 'Rent') == ['Rent']

    def test_click_on_only_group_restores_all(self):
        assert toggle_group(['Rent'], ['Food', 'Rent'], 'Rent') == ['Food', 'Rent']

    def test_click_on_hidden_group_isolates_it(self):
        assert toggle_group(['Rent'], ['Food', 'Rent'], 'Food') == ['Food']

    def test_resolve_selection(self):
        groups = ['Food', 'Rent', 'Travel']
        assert resolve_selection(groups, None) == groups
        assert resolve_selection(groups, ['Travel', 'Food']) == ['Food', 'Travel']
        assert resolve_selection(groups, ['Unknown']) == groups
        assert resolve_selection(groups, []) == groups


class TestTimeline:
    """Test timeline aggregation helpers"""

    def test_sum_by_group(self):
        postings = [
            Posting(date=date(2024, 1, 1), account='Expenses:Food', amount=Decimal('2')),
            Posting(date=date(2024, 1, 2), account='Expenses:Food', amount=Decimal('3')),
            Posting(date=date(2024, 1, 2), account='Expenses:Rent', amount=Decimal('7')),
        ]
        totals = sum_by_group(postings, lambda p: p.account)
        assert totals == {'Expenses:Food': Decimal('5'), 'Expenses:Rent': Decimal('7')}

    def test_unique_sorted(self):
        assert unique_sorted(['b', 'a', 'b']) == ['a', 'b']

    def test_totals(self):
        timeline = Timeline(
            labels=['Jan', 'Feb'],
            series=[
                BarSeries(key='a', color='#000000', values=[Decimal('1'), Decimal('2')], hover=[None, None]),
                BarSeries(key='b', color='#ffffff', values=[Decimal('-4'), Decimal('0')], hover=[None, None]),
            ],
        )
        assert timeline.totals() == [Decimal('-3'), Decimal('2')]
        assert not timeline.is_empty
        assert Timeline().is_empty
