"""PDA (Program Derived Address) derivation functions for the P2P Swap SDK."""

from typing import Tuple

from solders.pubkey import Pubkey

from .constants import PROGRAM_ID, SEED_ORDER_ACCOUNT, SEED_ORDER_WALLET_AUTHORITY
from .errors import DerivationError
from .utils import encode_u64, get_associated_token_address


def get_order_wallet_authority_pda(
    seller: Pubkey,
    program_id: Pubkey = PROGRAM_ID,
) -> Tuple[Pubkey, int]:
    """Derive the authority owning a seller's order wallets.

    Seeds: ["OrderWalletAuthority", seller]
    """
    return Pubkey.find_program_address(
        [SEED_ORDER_WALLET_AUTHORITY, bytes(seller)],
        program_id,
    )


def get_order_wallet_address(sell_mint: Pubkey, authority: Pubkey) -> Pubkey:
    """Derive the order wallet: the ATA of ``sell_mint`` owned by the authority.

    All orders of one seller selling the same token share this wallet.
    """
    return get_associated_token_address(authority, sell_mint, allow_owner_off_curve=True)


def get_order_pda(
    seller: Pubkey,
    creation_slot: int,
    program_id: Pubkey = PROGRAM_ID,
) -> Tuple[Pubkey, int]:
    """Derive the order account for a seller and creation slot.

    Seeds: ["OrderAccount", seller, creation_slot (u64 LE)]

    Raises:
        DerivationError: If creation_slot is not a valid u64
    """
    try:
        slot_seed = encode_u64(creation_slot)
    except ValueError as e:
        raise DerivationError(str(e)) from e

    return Pubkey.find_program_address(
        [SEED_ORDER_ACCOUNT, bytes(seller), slot_seed],
        program_id,
    )


def get_order_wallet_for_seller(
    seller: Pubkey,
    sell_mint: Pubkey,
    program_id: Pubkey = PROGRAM_ID,
) -> Pubkey:
    """Derive a seller's order wallet for a mint in one step."""
    authority, _ = get_order_wallet_authority_pda(seller, program_id)
    return get_order_wallet_address(sell_mint, authority)
