"""
Phone matching rules used to tie an incoming chat message to a ledger row.

Kept free of any Sheets I/O so the rule can be swapped or tested on its own.
"""
import re

_NON_DIGITS = re.compile(r'\D')


def normalize_phone(phone) -> str:
    """Strip everything except digits: '+1 (555) 123-4567' -> '15551234567'."""
    if not phone:
        return ''
    return _NON_DIGITS.sub('', str(phone))


def phones_match(left: str, right: str) -> bool:
    """
    Loose match on already-normalized numbers.

    Either number may contain the other, which covers a missing or extra
    country code. An empty number is contained in every number, so a row
    without a phone matches any lookup.
    """
    return left in right or right in left


def strict_phones_match(left: str, right: str) -> bool:
    """Same as phones_match, but empty numbers never match."""
    if not left or not right:
        return False
    return phones_match(left, right)
