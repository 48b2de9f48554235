"""Type definitions for the P2P Swap program module."""

from dataclasses import dataclass
from decimal import Decimal
from enum import IntEnum
from typing import Optional

from solders.pubkey import Pubkey

from .utils import amount_to_decimal


class OrderLayout(IntEnum):
    """Wire format version of an order account, valued by its exact size."""

    LEGACY = 137  # no token_mint field
    CURRENT = 169

    @property
    def size(self) -> int:
        return int(self)

    @property
    def has_token_mint(self) -> bool:
        return self is OrderLayout.CURRENT


class P2PSwapInstruction(IntEnum):
    """Leading discriminant byte of a P2P Swap instruction."""

    CREATE_PUBLIC_ORDER = 1
    CREATE_PRIVATE_ORDER = 2
    REVOKE_ORDER = 3  # reserved
    FILL_ORDER = 4


@dataclass(frozen=True)
class OrderRecord:
    """Order account data.

    ``token_mint`` is ``None`` for records decoded from the legacy layout.
    """

    creation_slot: int
    seller: Pubkey
    sell_amount: int
    order_wallet: Pubkey
    token_mint: Optional[Pubkey]
    price_mint: Pubkey
    buy_amount: int
    min_sell_amount: int
    remains_to_fill: int
    is_private: bool

    @property
    def layout(self) -> OrderLayout:
        return OrderLayout.CURRENT if self.token_mint is not None else OrderLayout.LEGACY


@dataclass(frozen=True)
class MintInfo:
    """Token mint metadata needed to render amounts."""

    address: Pubkey
    decimals: int


@dataclass(frozen=True)
class OrderDescriptor:
    """An order record together with its address and resolved mints."""

    address: Pubkey
    record: OrderRecord
    sell_token: MintInfo
    buy_token: MintInfo

    @property
    def seller(self) -> Pubkey:
        return self.record.seller

    @property
    def is_private(self) -> bool:
        return self.record.is_private

    @property
    def is_fillable(self) -> bool:
        """Whether at least a minimum fill is still available."""
        return (
            self.record.remains_to_fill > 0
            and self.record.remains_to_fill >= self.record.min_sell_amount
        )

    @property
    def price(self) -> Decimal:
        """Price of one sell token expressed in buy tokens."""
        sell = amount_to_decimal(self.record.sell_amount, self.sell_token.decimals)
        buy = amount_to_decimal(self.record.buy_amount, self.buy_token.decimals)
        return buy / sell

    @property
    def remains_to_fill_decimal(self) -> Decimal:
        return amount_to_decimal(self.record.remains_to_fill, self.sell_token.decimals)

    @property
    def min_sell_amount_decimal(self) -> Decimal:
        return amount_to_decimal(self.record.min_sell_amount, self.sell_token.decimals)


# Parameter types for client methods


@dataclass(frozen=True)
class CreateOrderParams:
    """Parameters for creating a new order."""

    signer: Pubkey
    sell_token: Pubkey  # mint of the token being sold
    buy_token: Pubkey  # mint of the token asked in exchange
    sell_amount: int
    buy_amount: int
    min_sell_amount: int
    creation_slot: int
    is_private: bool = False


@dataclass(frozen=True)
class FillOrderParams:
    """Parameters for filling (part of) an existing order."""

    signer: Pubkey
    order: OrderDescriptor
    sell_token_amount: int  # amount of the order's sell token to acquire
    unlock_key: Optional[bytes] = None  # required for private orders
