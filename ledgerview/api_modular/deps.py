"""
Shared dependencies: the ledger client and query parameter parsing
"""

from datetime import date
from typing import List, Optional

from fastapi import HTTPException, Query

from ..client import LedgerClient
from ..config import get_config
from ..dates import end_of_month, parse_month


_ledger_client: Optional[LedgerClient] = None


def create_ledger_client() -> LedgerClient:
    config = get_config()
    return LedgerClient(
        base_url=config.api_base_url,
        timeout=config.api_timeout,
        api_token=config.api_token or None,
    )


# Dependency to get the ledger client
def get_ledger_client() -> LedgerClient:
    global _ledger_client
    if _ledger_client is None:
        _ledger_client = create_ledger_client()
    return _ledger_client


def close_ledger_client():
    global _ledger_client
    if _ledger_client is not None:
        _ledger_client.close()
        _ledger_client = None


def month_param(month: str, name: str = "month") -> date:
    """YYYY-MM query value -> first day of the month, 400 when malformed"""
    try:
        return parse_month(month)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=f"{name}: {e}")


def month_range(from_month: Optional[str], to_month: Optional[str]):
    """Optional from/to months -> inclusive (first day, last day) range or None"""
    if not from_month and not to_month:
        return None
    start = month_param(from_month, "from") if from_month else date.min
    end = end_of_month(month_param(to_month, "to")) if to_month else date.max
    if start > end:
        raise HTTPException(status_code=400, detail="from must not be after to")
    return start, end


def groups_param(groups: Optional[List[str]] = Query(None, description="Groups to show")) -> Optional[List[str]]:
    return groups or None
