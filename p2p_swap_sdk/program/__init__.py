"""On-chain program interaction module for P2P Swap.

This module provides the client and utilities for interacting with
the P2P Swap program on Solana.
"""

from .accounts import (
    deserialize_mint_info,
    deserialize_order_record,
    deserialize_order_record_any,
    deserialize_token_account_mint,
    layout_for_size,
    serialize_order_record,
)
from .client import P2PSwapClient
from .constants import (
    ASSOCIATED_TOKEN_PROGRAM_ID,
    CLOCK_SYSVAR_ID,
    ED25519_PROGRAM_ID,
    INSTRUCTIONS_SYSVAR_ID,
    LEGACY_ORDER_ACCOUNT_SIZE,
    ORDER_ACCOUNT_SIZE,
    PROGRAM_ID,
    SYSTEM_PROGRAM_ID,
    TOKEN_PROGRAM_ID,
)
from .ed25519 import Ed25519SignatureOffsets, build_ed25519_verify_instruction
from .errors import (
    AccountNotFoundError,
    AddressMismatchError,
    DecodeError,
    DerivationError,
    DomainError,
    ErrorKind,
    InvalidAccountDataError,
    InvalidAmountError,
    InvalidUnlockKeyError,
    MissingTokenInfoError,
    MissingUnlockKeyError,
    OrderAddressInUseError,
    P2PSwapError,
    SellerMismatchError,
    SizeMismatchError,
    ValidationError,
    WalletMismatchError,
)
from .instructions import (
    build_approve_instruction,
    build_create_order_instruction,
    build_create_order_wallet_instruction,
    build_fill_order_instruction,
)
from .orders import (
    check_order,
    clamp_fill_amount,
    compute_buy_token_amount,
    validate_create_order_params,
    validate_fill_order_params,
    validate_order_record,
)
from .pda import (
    get_order_pda,
    get_order_wallet_address,
    get_order_wallet_authority_pda,
    get_order_wallet_for_seller,
)
from .transactions import (
    assemble_transaction,
    build_create_order_instructions,
    build_fill_order_instructions,
)
from .types import (
    CreateOrderParams,
    FillOrderParams,
    MintInfo,
    OrderDescriptor,
    OrderLayout,
    OrderRecord,
    P2PSwapInstruction,
)
from .unlock_key import (
    decode_unlock_key,
    encode_unlock_key,
    is_valid_unlock_key,
    sign_unlock_key,
    verify_unlock_key,
)
from .utils import get_associated_token_address

__all__ = [
    # Client
    "P2PSwapClient",
    # Constants
    "PROGRAM_ID",
    "TOKEN_PROGRAM_ID",
    "ASSOCIATED_TOKEN_PROGRAM_ID",
    "SYSTEM_PROGRAM_ID",
    "ED25519_PROGRAM_ID",
    "CLOCK_SYSVAR_ID",
    "INSTRUCTIONS_SYSVAR_ID",
    "ORDER_ACCOUNT_SIZE",
    "LEGACY_ORDER_ACCOUNT_SIZE",
    # Account (de)serialization
    "deserialize_order_record",
    "deserialize_order_record_any",
    "serialize_order_record",
    "deserialize_mint_info",
    "deserialize_token_account_mint",
    "layout_for_size",
    # PDA functions
    "get_order_wallet_authority_pda",
    "get_order_wallet_address",
    "get_order_pda",
    "get_order_wallet_for_seller",
    "get_associated_token_address",
    # Order validation
    "check_order",
    "validate_order_record",
    "validate_create_order_params",
    "validate_fill_order_params",
    "compute_buy_token_amount",
    "clamp_fill_amount",
    # Instruction builders
    "build_create_order_instruction",
    "build_fill_order_instruction",
    "build_approve_instruction",
    "build_create_order_wallet_instruction",
    "build_ed25519_verify_instruction",
    "Ed25519SignatureOffsets",
    # Transactions
    "build_create_order_instructions",
    "build_fill_order_instructions",
    "assemble_transaction",
    # Unlock keys
    "encode_unlock_key",
    "decode_unlock_key",
    "is_valid_unlock_key",
    "sign_unlock_key",
    "verify_unlock_key",
    # Types
    "OrderLayout",
    "OrderRecord",
    "MintInfo",
    "OrderDescriptor",
    "CreateOrderParams",
    "FillOrderParams",
    "P2PSwapInstruction",
    # Errors
    "ErrorKind",
    "P2PSwapError",
    "DecodeError",
    "SizeMismatchError",
    "InvalidAccountDataError",
    "AccountNotFoundError",
    "ValidationError",
    "SellerMismatchError",
    "AddressMismatchError",
    "WalletMismatchError",
    "MissingTokenInfoError",
    "DomainError",
    "InvalidAmountError",
    "InvalidUnlockKeyError",
    "MissingUnlockKeyError",
    "DerivationError",
    "OrderAddressInUseError",
]
