"""
Tests for hover text rendering
"""

from datetime import date
from decimal import Decimal

from ledgerview.models import Posting
from ledgerview.tooltip import AMOUNT, CLIPPED, create_tooltip_content, tooltip


def posting(account, amount):
    return Posting(date=date(2024, 1, 1), account=account, amount=Decimal(amount))


class TestTooltip:
    """Test row rendering"""

    def test_header_rows_and_total(self):
        text = tooltip([['Food', ('₹10.00', AMOUNT)]], total='₹10.00', header='Jan 2024')
        assert text == '<b>Jan 2024</b><br>Food  <b>₹10.00</b><br>Total  <b>₹10.00</b>'

    def test_escapes_html(self):
        assert tooltip([['A&B <Co>']]) == 'A&amp;B &lt;Co&gt;'

    def test_clips_long_cells(self):
        text = tooltip([[('x' * 40, CLIPPED)]])
        assert text == 'x' * 31 + '…'


class TestCreateTooltipContent:
    """Test aggregation into hover text"""

    def test_aggregates_and_sorts(self):
        postings = [posting('Food', '10'), posting('Rent', '100'), posting('Food', '5')]
        text = create_tooltip_content(postings, lambda p: p.amount, lambda p: p.account)

        lines = text.split('<br>')
        assert lines[0] == 'Rent  <b>₹100.00</b>'
        assert lines[1] == 'Food  <b>₹15.00</b>'
        assert lines[-1] == 'Total  <b>₹115.00</b>'

    def test_filter_condition(self):
        postings = [posting('Food', '10'), posting('Refund', '-3')]
        text = create_tooltip_content(
            postings, lambda p: p.amount, lambda p: p.account,
            filter_condition=lambda p: p.amount > 0,
        )
        assert 'Refund' not in text
        assert text.endswith('Total  <b>₹10.00</b>')

    def test_truncation_keeps_full_total(self):
        postings = [posting(f'Cat{i}', '1') for i in range(5)]
        text = create_tooltip_content(postings, lambda p: p.amount, lambda p: p.account, max_entries=3)

        assert '... and 2 more categories' in text
        assert text.endswith('Total  <b>₹5.00</b>')
