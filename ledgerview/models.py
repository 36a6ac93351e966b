"""
Ledger Data Models

Pydantic models for the records returned by the ledger API (postings,
incomes, taxes, yearly income cards, asset breakdowns) and the small
value types shared by the chart modules.
"""

from dataclasses import dataclass
from datetime import date as _date
from decimal import Decimal
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _to_date(value):
    # The API sends full ISO timestamps; only the calendar day matters here
    if isinstance(value, str) and len(value) > 10:
        return value[:10]
    return value


class Posting(BaseModel):
    """A single ledger line. Immutable once fetched."""
    model_config = ConfigDict(frozen=True)

    id: str = ""
    date: _date
    payee: str = ""
    account: str
    commodity: str = ""
    quantity: Decimal = Decimal('0')
    amount: Decimal
    status: str = ""
    tag_recurring: str = ""
    transaction_begin_line: int = 0
    transaction_end_line: int = 0
    file_name: str = ""
    note: str = ""
    transaction_note: str = ""
    market_amount: Decimal = Decimal('0')
    balance: Decimal = Decimal('0')

    @field_validator("date", mode="before")
    @classmethod
    def parse_date(cls, value):
        return _to_date(value)


class Income(BaseModel):
    """Postings of one period (a month as served, or a day once regrouped)"""
    date: _date
    postings: List[Posting] = Field(default_factory=list)

    @field_validator("date", mode="before")
    @classmethod
    def parse_date(cls, value):
        return _to_date(value)


class Tax(BaseModel):
    start_date: _date
    end_date: _date
    postings: List[Posting] = Field(default_factory=list)

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def parse_dates(cls, value):
        return _to_date(value)


class IncomeYearlyCard(BaseModel):
    """Income summary for one financial year"""
    start_date: _date
    end_date: _date
    postings: List[Posting] = Field(default_factory=list)
    gross_income: Decimal = Decimal('0')
    net_tax: Decimal = Decimal('0')
    net_income: Decimal = Decimal('0')

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def parse_dates(cls, value):
        return _to_date(value)


class AssetBreakdown(BaseModel):
    """Per-account aggregate, keyed by account path"""
    group: str
    investment_amount: Decimal = Decimal('0')
    withdrawal_amount: Decimal = Decimal('0')
    balance_units: Decimal = Decimal('0')
    market_amount: Decimal = Decimal('0')
    gain_amount: Decimal = Decimal('0')
    xirr: Decimal = Decimal('0')
    absolute_return: Decimal = Decimal('0')


class IncomeResponse(BaseModel):
    income_timeline: List[Income] = Field(default_factory=list)
    tax_timeline: List[Tax] = Field(default_factory=list)
    yearly_cards: List[IncomeYearlyCard] = Field(default_factory=list)


class ExpenseResponse(BaseModel):
    expenses: List[Posting] = Field(default_factory=list)


class RepaymentResponse(BaseModel):
    repayments: List[Posting] = Field(default_factory=list)


class AssetBalanceResponse(BaseModel):
    asset_breakdowns: Dict[str, AssetBreakdown] = Field(default_factory=dict)


@dataclass
class Legend:
    """Legend entry; `group` is the filter key a click toggles"""
    label: str
    color: str
    shape: str = "square"
    group: Optional[str] = None
    selected: bool = True

    def to_dict(self) -> dict:
        return {
            "label": self.label,
            "color": self.color,
            "shape": self.shape,
            "group": self.group,
            "selected": self.selected,
        }
