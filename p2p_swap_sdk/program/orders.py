"""Order validation and fill arithmetic for the P2P Swap SDK."""

from typing import Optional

from solders.pubkey import Pubkey

from .constants import MAX_U64, PROGRAM_ID, SIGNATURE_SIZE
from .errors import (
    AddressMismatchError,
    InvalidAmountError,
    InvalidUnlockKeyError,
    MissingTokenInfoError,
    MissingUnlockKeyError,
    SellerMismatchError,
    ValidationError,
    WalletMismatchError,
)
from .pda import get_order_pda, get_order_wallet_address, get_order_wallet_authority_pda
from .types import CreateOrderParams, FillOrderParams, OrderRecord


def check_order(
    record: OrderRecord,
    program_id: Pubkey = PROGRAM_ID,
    expected_address: Optional[Pubkey] = None,
    expected_seller: Optional[Pubkey] = None,
    sell_mint: Optional[Pubkey] = None,
) -> Optional[ValidationError]:
    """Cross-check an order record against the addresses it should derive to.

    Checks, in order: the seller (if ``expected_seller`` is given), the order
    address (if ``expected_address`` is given), and the order wallet. The
    sell mint used for the wallet check is ``sell_mint`` when given, else
    ``record.token_mint``.

    Returns the first failure, or None when the record is consistent. A
    record with a failure must not be trusted.
    """
    if expected_seller is not None and record.seller != expected_seller:
        return SellerMismatchError(str(expected_seller), str(record.seller))

    if expected_address is not None:
        derived_address, _ = get_order_pda(record.seller, record.creation_slot, program_id)
        if derived_address != expected_address:
            return AddressMismatchError(str(derived_address), str(expected_address))

    mint = sell_mint if sell_mint is not None else record.token_mint
    if mint is None:
        return MissingTokenInfoError()

    authority, _ = get_order_wallet_authority_pda(record.seller, program_id)
    derived_wallet = get_order_wallet_address(mint, authority)
    if derived_wallet != record.order_wallet:
        return WalletMismatchError(str(derived_wallet), str(record.order_wallet))

    return None


def validate_order_record(
    record: OrderRecord,
    program_id: Pubkey = PROGRAM_ID,
    expected_address: Optional[Pubkey] = None,
    expected_seller: Optional[Pubkey] = None,
    sell_mint: Optional[Pubkey] = None,
) -> None:
    """Like :func:`check_order` but raises the failure.

    Raises:
        ValidationError: If any check fails
    """
    error = check_order(record, program_id, expected_address, expected_seller, sell_mint)
    if error is not None:
        raise error


def _validate_u64_amount(name: str, value: int) -> None:
    if value <= 0:
        raise InvalidAmountError(name, value, "must be positive")
    if value > MAX_U64:
        raise InvalidAmountError(name, value, "exceeds u64 max")


def validate_create_order_params(params: CreateOrderParams) -> None:
    """Validate a create-order request before anything is built or sent.

    Raises:
        InvalidAmountError: If an amount is not positive, overflows u64, or
            the minimum fill exceeds the sell amount
    """
    _validate_u64_amount("sell_amount", params.sell_amount)
    _validate_u64_amount("buy_amount", params.buy_amount)
    _validate_u64_amount("min_sell_amount", params.min_sell_amount)
    if params.min_sell_amount > params.sell_amount:
        raise InvalidAmountError(
            "min_sell_amount",
            params.min_sell_amount,
            f"exceeds sell_amount {params.sell_amount}",
        )
    if not 0 <= params.creation_slot <= MAX_U64:
        raise InvalidAmountError("creation_slot", params.creation_slot, "not a valid u64")


def validate_fill_order_params(params: FillOrderParams) -> None:
    """Validate a fill-order request before anything is built or sent.

    Raises:
        InvalidAmountError: If the amount is not positive or exceeds what
            remains to fill
        MissingUnlockKeyError: If the order is private and no key is given
        InvalidUnlockKeyError: If the given key is not 64 bytes
    """
    record = params.order.record
    _validate_u64_amount("sell_token_amount", params.sell_token_amount)
    if params.sell_token_amount > record.remains_to_fill:
        raise InvalidAmountError(
            "sell_token_amount",
            params.sell_token_amount,
            f"exceeds remains_to_fill {record.remains_to_fill}",
        )
    if record.sell_amount == 0:
        raise InvalidAmountError("sell_amount", record.sell_amount, "order has no sell amount")

    if record.is_private:
        if params.unlock_key is None:
            raise MissingUnlockKeyError(str(params.order.address))
        if len(params.unlock_key) != SIGNATURE_SIZE:
            raise InvalidUnlockKeyError(len(params.unlock_key))


def compute_buy_token_amount(
    sell_token_amount: int,
    order_sell_amount: int,
    order_buy_amount: int,
) -> int:
    """Amount of buy token owed for ``sell_token_amount`` of the order's token.

    floor(sell_token_amount * order_buy_amount / order_sell_amount), computed
    with arbitrary-precision integers so the product never overflows.
    """
    if order_sell_amount <= 0:
        raise InvalidAmountError("sell_amount", order_sell_amount, "must be positive")
    return (sell_token_amount * order_buy_amount) // order_sell_amount


def clamp_fill_amount(amount: int, record: OrderRecord) -> int:
    """Clamp a requested fill into [min_sell_amount, remains_to_fill]."""
    if amount < record.min_sell_amount:
        amount = record.min_sell_amount
    if amount > record.remains_to_fill:
        amount = record.remains_to_fill
    return amount
