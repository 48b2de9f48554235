"""Instruction builders for the P2P Swap SDK.

This module provides functions to build the P2P Swap program instructions
(CreateOrder and FillOrder) and the SPL token instructions that accompany
them in a transaction. The RevokeOrder discriminant is reserved and has no
builder.
"""

from spl.token.instructions import (
    ApproveParams,
    approve,
    create_associated_token_account,
)
from solders.instruction import AccountMeta, Instruction
from solders.pubkey import Pubkey

from .constants import (
    CLOCK_SYSVAR_ID,
    INSTRUCTIONS_SYSVAR_ID,
    PROGRAM_ID,
    SYSTEM_PROGRAM_ID,
    TOKEN_PROGRAM_ID,
)
from .pda import get_order_pda, get_order_wallet_address, get_order_wallet_authority_pda
from .types import P2PSwapInstruction
from .utils import encode_u64, get_associated_token_address


def build_create_order_instruction(
    signer: Pubkey,
    sell_mint: Pubkey,
    buy_mint: Pubkey,
    sell_amount: int,
    buy_amount: int,
    min_sell_amount: int,
    creation_slot: int,
    is_private: bool = False,
    program_id: Pubkey = PROGRAM_ID,
) -> Instruction:
    """Build the create_order instruction.

    Accounts:
    0. clock sysvar
    1. signer (signer, writable)
    2. signer's sell token account (writable)
    3. sell_mint
    4. order_wallet_authority
    5. buy_mint
    6. order_wallet (writable)
    7. token_program
    8. order_account (writable)
    9. system_program

    Data: [1 (public) | 2 (private), sell_amount (u64), buy_amount (u64),
           min_sell_amount (u64), creation_slot (u64)]
    """
    signer_wallet = get_associated_token_address(signer, sell_mint)
    authority, _ = get_order_wallet_authority_pda(signer, program_id)
    order_wallet = get_order_wallet_address(sell_mint, authority)
    order_account, _ = get_order_pda(signer, creation_slot, program_id)

    discriminant = (
        P2PSwapInstruction.CREATE_PRIVATE_ORDER
        if is_private
        else P2PSwapInstruction.CREATE_PUBLIC_ORDER
    )

    data = bytearray()
    data.append(discriminant)
    data.extend(encode_u64(sell_amount))
    data.extend(encode_u64(buy_amount))
    data.extend(encode_u64(min_sell_amount))
    data.extend(encode_u64(creation_slot))

    accounts = [
        AccountMeta(pubkey=CLOCK_SYSVAR_ID, is_signer=False, is_writable=False),
        AccountMeta(pubkey=signer, is_signer=True, is_writable=True),
        AccountMeta(pubkey=signer_wallet, is_signer=False, is_writable=True),
        AccountMeta(pubkey=sell_mint, is_signer=False, is_writable=False),
        AccountMeta(pubkey=authority, is_signer=False, is_writable=False),
        AccountMeta(pubkey=buy_mint, is_signer=False, is_writable=False),
        AccountMeta(pubkey=order_wallet, is_signer=False, is_writable=True),
        AccountMeta(pubkey=TOKEN_PROGRAM_ID, is_signer=False, is_writable=False),
        AccountMeta(pubkey=order_account, is_signer=False, is_writable=True),
        AccountMeta(pubkey=SYSTEM_PROGRAM_ID, is_signer=False, is_writable=False),
    ]

    return Instruction(program_id=program_id, accounts=accounts, data=bytes(data))


def build_fill_order_instruction(
    buyer: Pubkey,
    seller: Pubkey,
    order_address: Pubkey,
    sell_mint: Pubkey,
    buy_mint: Pubkey,
    order_wallet: Pubkey,
    sell_token_amount: int,
    is_private: bool = False,
    program_id: Pubkey = PROGRAM_ID,
) -> Instruction:
    """Build the fill_order instruction.

    Accounts:
    0. seller
    1. buyer (signer, writable)
    2. order_account (writable)
    [instructions sysvar, private orders only]
    3. order_wallet_authority
    4. sell_mint
    5. order_wallet (writable)
    6. buy_mint
    7. buyer's buy token account (writable)
    8. seller's buy token account (writable)
    9. buyer's sell token account (writable)
    10. token_program

    Data: [4, sell_token_amount (u64)]

    The order wallet authority is derived from the seller: only the seller's
    authority owns the order wallet.
    """
    authority, _ = get_order_wallet_authority_pda(seller, program_id)
    buyer_buy_wallet = get_associated_token_address(buyer, buy_mint)
    seller_buy_wallet = get_associated_token_address(seller, buy_mint)
    buyer_sell_wallet = get_associated_token_address(buyer, sell_mint)

    data = bytearray()
    data.append(P2PSwapInstruction.FILL_ORDER)
    data.extend(encode_u64(sell_token_amount))

    accounts = [
        AccountMeta(pubkey=seller, is_signer=False, is_writable=False),
        AccountMeta(pubkey=buyer, is_signer=True, is_writable=True),
        AccountMeta(pubkey=order_address, is_signer=False, is_writable=True),
    ]

    if is_private:
        accounts.append(
            AccountMeta(pubkey=INSTRUCTIONS_SYSVAR_ID, is_signer=False, is_writable=False)
        )

    accounts.extend([
        AccountMeta(pubkey=authority, is_signer=False, is_writable=False),
        AccountMeta(pubkey=sell_mint, is_signer=False, is_writable=False),
        AccountMeta(pubkey=order_wallet, is_signer=False, is_writable=True),
        AccountMeta(pubkey=buy_mint, is_signer=False, is_writable=False),
        AccountMeta(pubkey=buyer_buy_wallet, is_signer=False, is_writable=True),
        AccountMeta(pubkey=seller_buy_wallet, is_signer=False, is_writable=True),
        AccountMeta(pubkey=buyer_sell_wallet, is_signer=False, is_writable=True),
        AccountMeta(pubkey=TOKEN_PROGRAM_ID, is_signer=False, is_writable=False),
    ])

    return Instruction(program_id=program_id, accounts=accounts, data=bytes(data))


def build_approve_instruction(
    source: Pubkey,
    delegate: Pubkey,
    owner: Pubkey,
    amount: int,
) -> Instruction:
    """Build an SPL token approve instruction.

    The P2P Swap program moves tokens as a delegate, so both create and fill
    approve the program id over the exact amount it will transfer.
    """
    return approve(
        ApproveParams(
            program_id=TOKEN_PROGRAM_ID,
            source=source,
            delegate=delegate,
            owner=owner,
            amount=amount,
        )
    )


def build_create_order_wallet_instruction(
    payer: Pubkey,
    authority: Pubkey,
    sell_mint: Pubkey,
) -> Instruction:
    """Build the instruction creating a seller's order wallet.

    The order wallet is the associated token account of ``sell_mint`` owned
    by the (off-curve) order wallet authority; ``payer`` funds it.
    """
    return create_associated_token_account(
        payer=payer,
        owner=authority,
        mint=sell_mint,
        token_program_id=TOKEN_PROGRAM_ID,
    )
