"""Raw token amount <-> decimal conversion."""

from decimal import ROUND_DOWN, Decimal, InvalidOperation
from typing import Union

from ..program.errors import InvalidAmountError
from ..program.constants import MAX_U64
from ..program.utils import amount_to_decimal


def amount_to_str(value: int, decimals: int) -> str:
    """Format a raw token amount as a plain decimal string.

    Trailing fractional zeros are dropped: 1500000 with 6 decimals -> "1.5".
    """
    text = format(amount_to_decimal(value, decimals), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def parse_amount(value: Union[str, Decimal], decimals: int) -> int:
    """Parse a decimal amount into raw token units.

    Fraction digits beyond the mint's precision are truncated.

    Raises:
        InvalidAmountError: If the value is not a finite, non-negative number
            that fits in a u64
    """
    try:
        amount = Decimal(value.strip() if isinstance(value, str) else value)
    except (InvalidOperation, ValueError, TypeError):
        raise InvalidAmountError("amount", value, "not a number")

    if not amount.is_finite():
        raise InvalidAmountError("amount", value, "not a finite number")
    if amount < 0:
        raise InvalidAmountError("amount", value, "must not be negative")

    raw = int(amount.scaleb(decimals).to_integral_value(rounding=ROUND_DOWN))
    if raw > MAX_U64:
        raise InvalidAmountError("amount", value, "exceeds u64 max")
    return raw


def order_price(
    sell_amount: int,
    sell_decimals: int,
    buy_amount: int,
    buy_decimals: int,
) -> Decimal:
    """Price of one sell token expressed in buy tokens.

    Raises:
        InvalidAmountError: If sell_amount is zero
    """
    if sell_amount <= 0:
        raise InvalidAmountError("sell_amount", sell_amount, "must be positive")
    return amount_to_decimal(buy_amount, buy_decimals) / amount_to_decimal(
        sell_amount, sell_decimals
    )
