"""
Asset Breakdown Rollup Module

Recomputes hierarchical account subtotals after leaf accounts are filtered.
Breakdowns arrive as a flat mapping of account path to aggregate; the tree
is implied by the paths. Parents are derived: every numeric field is the
sum of the direct children, and the ratios are recomputed from those sums.
"""

from collections import defaultdict
from decimal import Decimal
from typing import Callable, Dict, Iterable, List

from .accounts import ancestors, depth, is_descendant, is_malformed, parent_name
from .models import AssetBreakdown


ZERO = Decimal('0')

SUMMED_FIELDS = (
    "investment_amount",
    "withdrawal_amount",
    "balance_units",
    "market_amount",
    "gain_amount",
)


def leaf_accounts(breakdowns: Dict[str, AssetBreakdown]) -> List[str]:
    """Paths that have no descendant in the mapping"""
    paths = [p for p in breakdowns if not is_malformed(p)]
    parents = set()
    for path in paths:
        parents.update(ancestors(path))
    return sorted(p for p in paths if p not in parents)


def expand_to_leaves(breakdowns: Dict[str, AssetBreakdown], accounts: Iterable[str]) -> List[str]:
    """Leaves named by `accounts`; a parent account stands for every leaf below it"""
    accounts = set(accounts)
    return [
        leaf for leaf in leaf_accounts(breakdowns)
        if leaf in accounts or any(is_descendant(leaf, account) for account in accounts)
    ]


def _ratios(investment: Decimal, gain: Decimal, weighted_xirr: Decimal):
    if investment <= ZERO:
        return ZERO, ZERO
    return gain / investment, weighted_xirr / investment


def rollup(breakdowns: Dict[str, AssetBreakdown],
           selected: Iterable[str]) -> Dict[str, AssetBreakdown]:
    """
    Keep the selected leaves and rebuild every ancestor above them.

    Args:
        breakdowns: account path -> breakdown, as served by the ledger API
        selected: leaf account paths to keep

    Returns:
        New mapping holding the kept leaves unchanged plus one derived entry
        per ancestor that still has a visible descendant, sorted by path.
    """
    selected = set(selected)

    # Parents are always derived, even when selected
    leaves = [path for path in leaf_accounts(breakdowns) if path in selected]

    result: Dict[str, AssetBreakdown] = {
        path: breakdowns[path].model_copy() for path in leaves
    }

    derived = set()
    for leaf in leaves:
        derived.update(ancestors(leaf))

    children = defaultdict(list)
    for path in list(result) + list(derived):
        parent = parent_name(path)
        if parent is not None:
            children[parent].append(path)

    # Deepest first so that every child is final before its parent is summed
    for path in sorted(derived, key=lambda p: (-depth(p), p)):
        totals = {field: ZERO for field in SUMMED_FIELDS}
        weighted_xirr = ZERO
        for child_path in children[path]:
            child = result[child_path]
            for field in SUMMED_FIELDS:
                totals[field] += getattr(child, field)
            weighted_xirr += child.xirr * child.investment_amount

        absolute_return, xirr = _ratios(
            totals["investment_amount"], totals["gain_amount"], weighted_xirr
        )
        result[path] = AssetBreakdown(
            group=path,
            xirr=xirr,
            absolute_return=absolute_return,
            **totals
        )

    return dict(sorted(result.items()))


def filter_breakdowns(breakdowns: Dict[str, AssetBreakdown],
                      predicate: Callable[[str], bool]) -> Dict[str, AssetBreakdown]:
    """Roll up over the leaves accepted by `predicate`"""
    return rollup(breakdowns, [leaf for leaf in leaf_accounts(breakdowns) if predicate(leaf)])


def matches_search(query: str) -> Callable[[str], bool]:
    """Case-insensitive substring match on the account path"""
    needle = query.strip().lower()
    return lambda path: needle in path.lower()


def total_breakdown(breakdowns: Dict[str, AssetBreakdown], group: str = "Total") -> AssetBreakdown:
    """Sum of the top level entries (those whose parent is not in the mapping)"""
    roots = [b for path, b in breakdowns.items() if parent_name(path) not in breakdowns]
    totals = {field: sum((getattr(b, field) for b in roots), ZERO) for field in SUMMED_FIELDS}
    weighted_xirr = sum((b.xirr * b.investment_amount for b in roots), ZERO)
    absolute_return, xirr = _ratios(totals["investment_amount"], totals["gain_amount"], weighted_xirr)
    return AssetBreakdown(group=group, xirr=xirr, absolute_return=absolute_return, **totals)
