"""Transaction assembly for the P2P Swap SDK.

Pure functions: given everything the network would tell us (order wallet
existence, blockhash), produce the instruction lists and unsigned
transactions. :class:`~p2p_swap_sdk.program.client.P2PSwapClient` supplies
the network facts.
"""

from typing import List, Tuple

from solders.hash import Hash
from solders.instruction import Instruction
from solders.message import Message
from solders.pubkey import Pubkey
from solders.transaction import Transaction

from .constants import PROGRAM_ID
from .ed25519 import build_ed25519_verify_instruction
from .errors import MissingUnlockKeyError
from .instructions import (
    build_approve_instruction,
    build_create_order_instruction,
    build_create_order_wallet_instruction,
    build_fill_order_instruction,
)
from .orders import compute_buy_token_amount, validate_create_order_params, validate_fill_order_params
from .pda import get_order_pda, get_order_wallet_authority_pda
from .types import CreateOrderParams, FillOrderParams
from .utils import get_associated_token_address


def build_create_order_instructions(
    params: CreateOrderParams,
    order_wallet_exists: bool,
    program_id: Pubkey = PROGRAM_ID,
) -> Tuple[List[Instruction], Pubkey]:
    """Build the instructions of a create-order transaction.

    Order: [create order wallet, if missing], approve the program over
    ``sell_amount`` of the signer's sell token account, CreateOrder.

    Returns:
        The instructions and the address of the order account being created
    """
    validate_create_order_params(params)

    authority, _ = get_order_wallet_authority_pda(params.signer, program_id)
    order_address, _ = get_order_pda(params.signer, params.creation_slot, program_id)

    instructions: List[Instruction] = []
    if not order_wallet_exists:
        instructions.append(
            build_create_order_wallet_instruction(params.signer, authority, params.sell_token)
        )

    seller_wallet = get_associated_token_address(params.signer, params.sell_token)
    instructions.append(
        build_approve_instruction(
            source=seller_wallet,
            delegate=program_id,
            owner=params.signer,
            amount=params.sell_amount,
        )
    )

    instructions.append(
        build_create_order_instruction(
            signer=params.signer,
            sell_mint=params.sell_token,
            buy_mint=params.buy_token,
            sell_amount=params.sell_amount,
            buy_amount=params.buy_amount,
            min_sell_amount=params.min_sell_amount,
            creation_slot=params.creation_slot,
            is_private=params.is_private,
            program_id=program_id,
        )
    )

    return instructions, order_address


def build_fill_order_instructions(
    params: FillOrderParams,
    program_id: Pubkey = PROGRAM_ID,
) -> List[Instruction]:
    """Build the instructions of a fill-order transaction.

    Order: approve the program over the computed buy-token amount of the
    buyer's buy token account, [Ed25519 verify of the unlock key, private
    orders only], FillOrder.

    Raises:
        MissingUnlockKeyError: If the order is private and no key is given
        InvalidAmountError: If the fill amount is outside the order's range
    """
    validate_fill_order_params(params)

    order = params.order
    record = order.record
    sell_mint = order.sell_token.address
    buy_mint = order.buy_token.address

    buy_token_amount = compute_buy_token_amount(
        params.sell_token_amount, record.sell_amount, record.buy_amount
    )
    buyer_buy_wallet = get_associated_token_address(params.signer, buy_mint)

    instructions: List[Instruction] = [
        build_approve_instruction(
            source=buyer_buy_wallet,
            delegate=program_id,
            owner=params.signer,
            amount=buy_token_amount,
        )
    ]

    if record.is_private:
        if params.unlock_key is None:
            raise MissingUnlockKeyError(str(order.address))
        instructions.append(
            build_ed25519_verify_instruction(
                pubkey=bytes(record.seller),
                signature=params.unlock_key,
                message=bytes(order.address),
            )
        )

    instructions.append(
        build_fill_order_instruction(
            buyer=params.signer,
            seller=record.seller,
            order_address=order.address,
            sell_mint=sell_mint,
            buy_mint=buy_mint,
            order_wallet=record.order_wallet,
            sell_token_amount=params.sell_token_amount,
            is_private=record.is_private,
            program_id=program_id,
        )
    )

    return instructions


def assemble_transaction(
    instructions: List[Instruction],
    fee_payer: Pubkey,
    blockhash: Hash,
) -> Transaction:
    """Build an unsigned transaction with one fee payer and one blockhash."""
    message = Message.new_with_blockhash(instructions, fee_payer, blockhash)
    return Transaction.new_unsigned(message)
