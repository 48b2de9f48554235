"""Shared helpers for applications built on the program module."""

from .amounts import amount_to_decimal, amount_to_str, order_price, parse_amount
from .links import OrderLink, build_order_link, parse_order_link
from .validation import is_valid_pubkey, is_valid_u64, parse_u64

__all__ = [
    "amount_to_decimal",
    "amount_to_str",
    "parse_amount",
    "order_price",
    "OrderLink",
    "build_order_link",
    "parse_order_link",
    "is_valid_pubkey",
    "parse_u64",
    "is_valid_u64",
]
