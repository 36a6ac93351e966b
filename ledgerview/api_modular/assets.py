"""
Asset breakdown endpoints
"""

from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, Query

from .deps import get_ledger_client
from .schemas import BreakdownModel, BreakdownResponse
from ..breakdown import expand_to_leaves, leaf_accounts, matches_search, rollup, total_breakdown
from ..client import LedgerClient
from ..models import AssetBreakdown


router = APIRouter()


def filtered_breakdown(breakdowns: Dict[str, AssetBreakdown],
                       accounts: Optional[List[str]] = None,
                       search: Optional[str] = None) -> BreakdownResponse:
    """Rollup over the chosen leaves (all by default), narrowed by search text"""
    leaves = leaf_accounts(breakdowns)

    selected = expand_to_leaves(breakdowns, accounts) if accounts else leaves
    if search:
        predicate = matches_search(search)
        selected = [leaf for leaf in selected if predicate(leaf)]

    result = rollup(breakdowns, selected)

    return BreakdownResponse(
        breakdowns={path: BreakdownModel.from_breakdown(b) for path, b in result.items()},
        leaves=leaves,
        selected=[path for path in selected if path in result],
        total=BreakdownModel.from_breakdown(total_breakdown(result)),
    )


@router.get("/breakdown", response_model=BreakdownResponse)
def get_asset_breakdown(
    accounts: Optional[List[str]] = Query(None, description="Accounts to keep; a parent keeps all of its leaves"),
    search: Optional[str] = Query(None, description="Keep leaves whose path contains this text"),
    client: LedgerClient = Depends(get_ledger_client),
):
    """Asset breakdowns with parent totals recomputed over the selected leaves"""
    return filtered_breakdown(client.get_asset_balance().asset_breakdowns, accounts, search)
