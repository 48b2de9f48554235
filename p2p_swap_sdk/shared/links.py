"""Shareable order links.

A link opens the swap site in buy mode on one order, optionally carrying the
unlock key of a private order:

    {domain}/?mode=Buy&order_address=<base58>[&unlock_key=<base58>]
"""

from dataclasses import dataclass
from typing import Optional, Union
from urllib.parse import parse_qs, urlencode, urlsplit

from solders.pubkey import Pubkey

from ..program.unlock_key import encode_unlock_key

BUY_MODE = "Buy"


@dataclass(frozen=True)
class OrderLink:
    """Parameters carried by an order link."""

    mode: str
    order_address: Optional[Pubkey]
    unlock_key: Optional[str]


def build_order_link(
    domain: str,
    order_address: Pubkey,
    unlock_key: Union[str, bytes, None] = None,
) -> str:
    """Build the link a seller shares with buyers of an order.

    ``unlock_key`` may be the raw 64-byte signature or its base-58 text.
    """
    params = {"mode": BUY_MODE, "order_address": str(order_address)}
    if unlock_key:
        if isinstance(unlock_key, (bytes, bytearray)):
            unlock_key = encode_unlock_key(bytes(unlock_key))
        params["unlock_key"] = unlock_key

    return f"{domain.rstrip('/')}/?{urlencode(params)}"


def parse_order_link(url: str) -> OrderLink:
    """Extract the order parameters from a link.

    A missing mode defaults to buy mode. A malformed order address parses
    as None; the unlock key is returned as text and is not decoded here.
    """
    query = parse_qs(urlsplit(url).query)

    mode = query.get("mode", [BUY_MODE])[0] or BUY_MODE

    order_address = None
    raw_address = query.get("order_address", [None])[0]
    if raw_address:
        try:
            order_address = Pubkey.from_string(raw_address)
        except Exception:
            order_address = None

    unlock_key = query.get("unlock_key", [None])[0] or None

    return OrderLink(mode=mode, order_address=order_address, unlock_key=unlock_key)
