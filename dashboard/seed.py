#!/usr/bin/env python3
"""Seed data for the Ledgerview Dashboard demo mode

Generates a deterministic ledger in the shape the ledger API serves it:
- two years of monthly salary, interest and dividend income, with taxes
- yearly income cards per financial year (April to March)
- daily expenses across a dozen categories
- monthly loan and credit card repayments
- an asset tree of deposits, mutual funds and stocks with gains and XIRR

Run with: python -m dashboard.seed  (prints the payloads as JSON)
"""

import json
import random
import sys
from datetime import date, timedelta
from decimal import Decimal
from pathlib import Path
from typing import Any, Dict, List

# Add parent to path so the ledgerview package is importable
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from ledgerview.breakdown import rollup
from ledgerview.dates import add_months, end_of_month, for_each_month, month_key, now, start_of_month
from ledgerview.models import AssetBreakdown

MONTHS_OF_HISTORY = 24

INCOME_SOURCES = [
    # account, payee, monthly amount
    ('Income:Salary:Acme', 'Acme Corp', Decimal('185000')),
    ('Income:Interest:Savings', 'State Bank', Decimal('1450')),
    ('Income:Dividend:Equity', 'Broker', Decimal('3200')),
]

EXPENSE_CATEGORIES = {
    # category: (payees, low, high, postings per month)
    'Rent': (['Landlord'], 32000, 32000, 1),
    'Food': (['Grocery Mart', 'Fresh Farm', 'Bakery'], 300, 2500, 10),
    'Restaurant': (['Pizza Place', 'Cafe Coffee', 'Sushi Bar'], 400, 3200, 4),
    'Transport': (['Metro Card', 'Cab Service', 'Fuel Station'], 100, 1800, 6),
    'Utilities': (['Electricity Board', 'Water Board', 'Internet ISP'], 600, 3500, 3),
    'Shopping': (['Online Store', 'Clothing Store'], 800, 9000, 2),
    'Health': (['Pharmacy', 'Clinic'], 200, 4000, 1),
    'Entertainment': (['Streaming', 'Cinema'], 199, 1500, 2),
    'Travel': (['Airline', 'Hotel'], 4000, 25000, 0),
    'Education': (['Bookstore', 'Online Course'], 300, 6000, 1),
    'Gifts': (['Gift Shop'], 500, 5000, 0),
    'Insurance': (['Insurer'], 2400, 2400, 1),
}

REPAYMENTS = [
    ('Liabilities:Loan:Home', 'Home Loan EMI', Decimal('42000')),
    ('Liabilities:Loan:Car', 'Car Loan EMI', Decimal('15500')),
    ('Liabilities:CreditCard:Visa', 'Card Payment', None),
]

ASSETS = {
    # leaf account: (investment, withdrawal, units, market, xirr)
    'Assets:Bank:Savings': ('250000', '40000', '210000', '210000', '3.5'),
    'Assets:Bank:FixedDeposit': ('500000', '0', '500000', '541000', '7.1'),
    'Assets:Equity:Stocks:Infra': ('180000', '20000', '420', '236000', '18.4'),
    'Assets:Equity:Stocks:Tech': ('320000', '0', '610', '298000', '-4.2'),
    'Assets:Equity:MutualFund:Index': ('600000', '50000', '5120.35', '702000', '12.9'),
    'Assets:Equity:MutualFund:SmallCap': ('150000', '0', '3300.1', '171500', '15.6'),
    'Assets:Debt:MutualFund:Liquid': ('120000', '60000', '21.7', '61800', '6.8'),
    'Assets:Gold:Sovereign': ('0', '0', '0', '0', '0'),
}


def _posting(rng: random.Random, day: date, payee: str, account: str, amount: Decimal) -> Dict[str, Any]:
    return {
        'id': f"{account}:{day.isoformat()}:{rng.randrange(10 ** 6):06d}",
        'date': day.isoformat(),
        'payee': payee,
        'account': account,
        'commodity': 'INR',
        'quantity': str(amount),
        'amount': str(amount),
        'status': 'cleared',
    }


def _months(today: date) -> List[date]:
    first = add_months(start_of_month(today), -(MONTHS_OF_HISTORY - 1))
    return list(for_each_month(first, today))


def _financial_year_start(d: date) -> date:
    return date(d.year if d.month >= 4 else d.year - 1, 4, 1)


def seed_income(rng: random.Random, today: date) -> Dict[str, Any]:
    """Income timeline, tax timeline and yearly cards"""
    incomes, taxes = [], []
    for month in _months(today):
        postings = []
        for account, payee, amount in INCOME_SOURCES:
            jitter = Decimal(rng.randint(-5, 5)) / 100 if 'Salary' not in account else Decimal('0')
            day = month.replace(day=1 if 'Salary' in account else rng.randint(5, 25))
            if day > today:
                continue
            postings.append(_posting(rng, day, payee, account, -(amount * (1 + jitter)).quantize(Decimal('1'))))
        # Occasional bonus and a refund booked against income
        if month.month == 3:
            postings.append(_posting(rng, month.replace(day=15), 'Acme Corp', 'Income:Salary:Bonus',
                                     Decimal('-250000')))
        if rng.random() < 0.15:
            postings.append(_posting(rng, month.replace(day=20), 'Acme Corp', 'Income:Salary:Acme',
                                     Decimal('4000')))
        postings = [p for p in postings if p['date'] <= today.isoformat()]
        incomes.append({'date': month.isoformat(), 'postings': postings})

        tax = Decimal('38500') + (Decimal('60000') if month.month == 3 else Decimal('0'))
        taxes.append({
            'start_date': month.isoformat(),
            'end_date': end_of_month(month).isoformat(),
            'postings': [_posting(rng, month.replace(day=1), 'Income Tax Dept', 'Expenses:Tax:Income', tax)],
        })

    cards: Dict[date, Dict[str, Any]] = {}
    for income, tax in zip(incomes, taxes):
        fy = _financial_year_start(date.fromisoformat(income['date']))
        card = cards.setdefault(fy, {
            'start_date': fy.isoformat(),
            'end_date': (date(fy.year + 1, 4, 1) - timedelta(days=1)).isoformat(),
            'postings': [],
            'gross_income': Decimal('0'),
            'net_tax': Decimal('0'),
        })
        card['postings'].extend(income['postings'])
        card['gross_income'] += -sum(Decimal(p['amount']) for p in income['postings'])
        card['net_tax'] += sum(Decimal(p['amount']) for p in tax['postings'])

    yearly_cards = []
    for fy in sorted(cards):
        card = cards[fy]
        yearly_cards.append({
            **card,
            'gross_income': str(card['gross_income']),
            'net_tax': str(card['net_tax']),
            'net_income': str(card['gross_income'] - card['net_tax']),
        })

    return {'income_timeline': incomes, 'tax_timeline': taxes, 'yearly_cards': yearly_cards}


def seed_expenses(rng: random.Random, today: date) -> Dict[str, Any]:
    expenses = []
    for month in _months(today):
        last_day = min(end_of_month(month), today).day
        for category, (payees, low, high, count) in EXPENSE_CATEGORIES.items():
            if count == 0:
                count = 1 if rng.random() < 0.2 else 0
            for _ in range(count):
                day = month.replace(day=rng.randint(1, last_day))
                amount = Decimal(rng.randint(low, high))
                expenses.append(_posting(rng, day, rng.choice(payees), f"Expenses:{category}", amount))
        # Refunds show up as negative expenses
        if rng.random() < 0.1:
            expenses.append(_posting(rng, month.replace(day=last_day), 'Online Store',
                                     'Expenses:Shopping', Decimal(-rng.randint(500, 3000))))

    expenses.sort(key=lambda p: p['date'])
    return {'expenses': expenses}


def seed_repayments(rng: random.Random, today: date) -> Dict[str, Any]:
    repayments = []
    for i, month in enumerate(_months(today)):
        for account, payee, amount in REPAYMENTS:
            if account.endswith('Car') and i < 6:
                continue  # car loan started later
            day = month.replace(day=5)
            if day > today:
                continue
            if amount is None:
                amount = Decimal(rng.randint(8000, 30000))
            repayments.append(_posting(rng, day, payee, account, amount))
    return {'repayments': repayments}


def seed_assets() -> Dict[str, Any]:
    leaves = {}
    for account, (investment, withdrawal, units, market, xirr) in ASSETS.items():
        investment, withdrawal, market = Decimal(investment), Decimal(withdrawal), Decimal(market)
        gain = market + withdrawal - investment
        leaves[account] = AssetBreakdown(
            group=account,
            investment_amount=investment,
            withdrawal_amount=withdrawal,
            balance_units=Decimal(units),
            market_amount=market,
            gain_amount=gain,
            xirr=Decimal(xirr),
            absolute_return=gain / investment if investment > 0 else Decimal('0'),
        )

    tree = rollup(leaves, list(leaves))
    return {'asset_breakdowns': {path: b.model_dump(mode='json') for path, b in tree.items()}}


def seed_payloads(today: date = None, seed: int = 42) -> Dict[str, Dict[str, Any]]:
    """Payloads keyed by ledger API path, ready for StaticLedgerClient"""
    today = today or now()
    rng = random.Random(seed)
    return {
        '/api/income': seed_income(rng, today),
        '/api/expense': seed_expenses(rng, today),
        '/api/liabilities/repayment': seed_repayments(rng, today),
        '/api/assets/balance': seed_assets(),
    }


def main():
    payloads = seed_payloads()
    print(f"🌱 Seeded demo ledger up to {month_key(now())}", file=sys.stderr)
    for path, payload in payloads.items():
        sizes = {key: len(value) for key, value in payload.items()}
        print(f"   {path}: {sizes}", file=sys.stderr)
    json.dump(payloads, sys.stdout, default=str, indent=2)


if __name__ == "__main__":
    main()
