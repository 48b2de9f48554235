"""Input validation predicates for user-supplied strings."""

from typing import Optional

from solders.pubkey import Pubkey

from ..program.constants import MAX_U64


def is_valid_pubkey(value: Optional[str]) -> bool:
    """Check that a string is a valid Solana pubkey (Base58, 32 bytes).

    Uses solders.Pubkey for proper validation including length check.
    """
    if not value or not value.strip():
        return False

    try:
        Pubkey.from_string(value.strip())
    except Exception:
        return False
    return True


def parse_u64(value: Optional[str]) -> Optional[int]:
    """Parse a base-10 unsigned 64-bit integer, or return None."""
    if value is None:
        return None

    value = value.strip()
    if not (value.isascii() and value.isdigit()):
        return None

    number = int(value)
    if number > MAX_U64:
        return None
    return number


def is_valid_u64(value: Optional[str]) -> bool:
    """Check that a string is a base-10 unsigned 64-bit integer."""
    return parse_u64(value) is not None
