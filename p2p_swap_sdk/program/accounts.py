"""Account (de)serialization for the P2P Swap SDK."""

from typing import Optional

from solders.pubkey import Pubkey

from .constants import (
    LEGACY_ORDER_BUY_AMOUNT_OFFSET,
    LEGACY_ORDER_IS_PRIVATE_OFFSET,
    LEGACY_ORDER_MIN_SELL_AMOUNT_OFFSET,
    LEGACY_ORDER_PRICE_MINT_OFFSET,
    LEGACY_ORDER_REMAINS_TO_FILL_OFFSET,
    MINT_ACCOUNT_SIZE,
    MINT_DECIMALS_OFFSET,
    MINT_IS_INITIALIZED_OFFSET,
    ORDER_BUY_AMOUNT_OFFSET,
    ORDER_CREATION_SLOT_OFFSET,
    ORDER_IS_PRIVATE_OFFSET,
    ORDER_MIN_SELL_AMOUNT_OFFSET,
    ORDER_PRICE_MINT_OFFSET,
    ORDER_REMAINS_TO_FILL_OFFSET,
    ORDER_SELL_AMOUNT_OFFSET,
    ORDER_SELLER_OFFSET,
    ORDER_TOKEN_MINT_OFFSET,
    ORDER_WALLET_OFFSET,
    PUBKEY_SIZE,
    TOKEN_ACCOUNT_MINT_OFFSET,
)
from .errors import InvalidAccountDataError, SizeMismatchError
from .types import MintInfo, OrderLayout, OrderRecord
from .utils import decode_bool, decode_pubkey, decode_u64, decode_u8, encode_u64, encode_u8


def layout_for_size(size: int) -> Optional[OrderLayout]:
    """Return the order layout whose exact size is ``size``, if any."""
    for layout in OrderLayout:
        if layout.size == size:
            return layout
    return None


def deserialize_order_record(
    data: bytes,
    layout: OrderLayout = OrderLayout.CURRENT,
) -> OrderRecord:
    """Deserialize an order account.

    Current layout (169 bytes):
    - [0..8]: creation_slot (u64 LE)
    - [8..40]: seller (Pubkey)
    - [40..48]: sell_amount (u64 LE)
    - [48..80]: order_wallet (Pubkey)
    - [80..112]: token_mint (Pubkey)
    - [112..144]: price_mint (Pubkey)
    - [144..152]: buy_amount (u64 LE)
    - [152..160]: min_sell_amount (u64 LE)
    - [160..168]: remains_to_fill (u64 LE)
    - [168]: is_private (u8, non-zero = true)

    Legacy layout (137 bytes) is the same without token_mint.

    Raises:
        SizeMismatchError: If the data is not exactly ``layout.size`` bytes
    """
    if len(data) != layout.size:
        raise SizeMismatchError(len(data), [layout.size])

    if layout is OrderLayout.CURRENT:
        return OrderRecord(
            creation_slot=decode_u64(data, ORDER_CREATION_SLOT_OFFSET),
            seller=decode_pubkey(data, ORDER_SELLER_OFFSET),
            sell_amount=decode_u64(data, ORDER_SELL_AMOUNT_OFFSET),
            order_wallet=decode_pubkey(data, ORDER_WALLET_OFFSET),
            token_mint=decode_pubkey(data, ORDER_TOKEN_MINT_OFFSET),
            price_mint=decode_pubkey(data, ORDER_PRICE_MINT_OFFSET),
            buy_amount=decode_u64(data, ORDER_BUY_AMOUNT_OFFSET),
            min_sell_amount=decode_u64(data, ORDER_MIN_SELL_AMOUNT_OFFSET),
            remains_to_fill=decode_u64(data, ORDER_REMAINS_TO_FILL_OFFSET),
            is_private=decode_bool(data, ORDER_IS_PRIVATE_OFFSET),
        )

    return OrderRecord(
        creation_slot=decode_u64(data, ORDER_CREATION_SLOT_OFFSET),
        seller=decode_pubkey(data, ORDER_SELLER_OFFSET),
        sell_amount=decode_u64(data, ORDER_SELL_AMOUNT_OFFSET),
        order_wallet=decode_pubkey(data, ORDER_WALLET_OFFSET),
        token_mint=None,
        price_mint=decode_pubkey(data, LEGACY_ORDER_PRICE_MINT_OFFSET),
        buy_amount=decode_u64(data, LEGACY_ORDER_BUY_AMOUNT_OFFSET),
        min_sell_amount=decode_u64(data, LEGACY_ORDER_MIN_SELL_AMOUNT_OFFSET),
        remains_to_fill=decode_u64(data, LEGACY_ORDER_REMAINS_TO_FILL_OFFSET),
        is_private=decode_bool(data, LEGACY_ORDER_IS_PRIVATE_OFFSET),
    )


def deserialize_order_record_any(data: bytes) -> OrderRecord:
    """Deserialize an order account of either layout, chosen by exact size.

    Raises:
        SizeMismatchError: If the size matches no known layout
    """
    layout = layout_for_size(len(data))
    if layout is None:
        raise SizeMismatchError(len(data), [layout.size for layout in OrderLayout])
    return deserialize_order_record(data, layout)


def serialize_order_record(
    record: OrderRecord,
    layout: Optional[OrderLayout] = None,
) -> bytes:
    """Serialize an order record; the exact inverse of deserialization.

    The layout defaults to the one implied by ``record.token_mint``.

    Raises:
        InvalidAccountDataError: If the record cannot be represented in the
            layout or violates the order invariants
    """
    if layout is None:
        layout = record.layout

    if layout.has_token_mint and record.token_mint is None:
        raise InvalidAccountDataError("token_mint is required by the current layout")
    if not layout.has_token_mint and record.token_mint is not None:
        raise InvalidAccountDataError("legacy layout cannot store token_mint")
    if record.remains_to_fill > record.sell_amount:
        raise InvalidAccountDataError(
            f"remains_to_fill {record.remains_to_fill} exceeds "
            f"sell_amount {record.sell_amount}"
        )
    if record.min_sell_amount > record.sell_amount:
        raise InvalidAccountDataError(
            f"min_sell_amount {record.min_sell_amount} exceeds "
            f"sell_amount {record.sell_amount}"
        )

    try:
        data = bytearray()
        data.extend(encode_u64(record.creation_slot))
        data.extend(bytes(record.seller))
        data.extend(encode_u64(record.sell_amount))
        data.extend(bytes(record.order_wallet))
        if layout.has_token_mint:
            data.extend(bytes(record.token_mint))
        data.extend(bytes(record.price_mint))
        data.extend(encode_u64(record.buy_amount))
        data.extend(encode_u64(record.min_sell_amount))
        data.extend(encode_u64(record.remains_to_fill))
        data.extend(encode_u8(1 if record.is_private else 0))
    except ValueError as e:
        raise InvalidAccountDataError(str(e)) from e

    return bytes(data)


def deserialize_mint_info(address: Pubkey, data: bytes) -> MintInfo:
    """Read the decimals of an SPL token mint account.

    Layout (82 bytes):
    - [0..4]: mint_authority option tag
    - [4..36]: mint_authority
    - [36..44]: supply (u64 LE)
    - [44]: decimals (u8)
    - [45]: is_initialized (bool)
    - [46..82]: freeze_authority option

    Raises:
        InvalidAccountDataError: If the data is not an initialized mint
    """
    if len(data) != MINT_ACCOUNT_SIZE:
        raise InvalidAccountDataError(
            f"Mint data size mismatch: {len(data)} bytes (expected {MINT_ACCOUNT_SIZE})"
        )
    if not decode_bool(data, MINT_IS_INITIALIZED_OFFSET):
        raise InvalidAccountDataError(f"Mint {address} is not initialized")
    return MintInfo(address=address, decimals=decode_u8(data, MINT_DECIMALS_OFFSET))


def deserialize_token_account_mint(data: bytes) -> Pubkey:
    """Read the mint of an SPL token account (mint is stored first)."""
    if len(data) < TOKEN_ACCOUNT_MINT_OFFSET + PUBKEY_SIZE:
        raise InvalidAccountDataError(f"Token account data too short: {len(data)} bytes")
    return decode_pubkey(data, TOKEN_ACCOUNT_MINT_OFFSET)
