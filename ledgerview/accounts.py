"""
Account path helpers.

Accounts are colon separated paths (``Assets:Equity:Fund``). The tree is
implicit: an account's parent is its path minus the last segment.
"""

from typing import List, Optional

SEPARATOR = ":"


def segments(account: str) -> List[str]:
    return account.split(SEPARATOR)


def is_malformed(account: str) -> bool:
    """Empty paths or paths with empty segments (``Assets::Fund``, ``Assets:``)"""
    if not account:
        return True
    return any(part.strip() == "" for part in segments(account))


def first_name(account: str) -> str:
    return segments(account)[0]


def second_name(account: str) -> str:
    """Second segment; single segment accounts fall back to their only segment"""
    parts = segments(account)
    return parts[1] if len(parts) > 1 else parts[0]


def rest_name(account: str) -> str:
    """Everything after the first segment, empty for a single segment"""
    return SEPARATOR.join(segments(account)[1:])


def last_name(account: str) -> str:
    return segments(account)[-1]


def parent_name(account: str) -> Optional[str]:
    parts = segments(account)
    if len(parts) < 2:
        return None
    return SEPARATOR.join(parts[:-1])


def depth(account: str) -> int:
    return len(segments(account))


def ancestors(account: str) -> List[str]:
    """All proper ancestors, nearest first"""
    result = []
    parent = parent_name(account)
    while parent is not None:
        result.append(parent)
        parent = parent_name(parent)
    return result


def is_descendant(account: str, ancestor: str) -> bool:
    return account.startswith(ancestor + SEPARATOR)
