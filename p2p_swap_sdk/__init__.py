"""P2P Swap SDK - Python SDK for the p2p-swap program on Solana.

This SDK provides two main modules:
- `program`: On-chain program interaction (account codecs, PDAs,
  instructions, transactions and the RPC client)
- `shared`: Amount formatting, input validation and order links

Example:
    from p2p_swap_sdk import P2PSwapClient, PROGRAM_ID

    # Or import from specific modules
    from p2p_swap_sdk.program import P2PSwapClient
    from p2p_swap_sdk.shared import build_order_link
"""

__version__ = "0.1.0"

# ============================================================================
# MODULE IMPORTS
# ============================================================================

# Import submodules for namespace access
from . import program
from . import shared

# ============================================================================
# CONVENIENCE RE-EXPORTS
# ============================================================================

from .config import ClientConfig
from .program import (
    P2PSwapClient,
    PROGRAM_ID,
    # Account (de)serialization
    deserialize_order_record,
    deserialize_order_record_any,
    serialize_order_record,
    # PDA functions
    get_order_wallet_authority_pda,
    get_order_wallet_address,
    get_order_pda,
    # Validation
    check_order,
    validate_order_record,
    compute_buy_token_amount,
    # Instruction builders
    build_create_order_instruction,
    build_fill_order_instruction,
    build_ed25519_verify_instruction,
    # Transactions
    build_create_order_instructions,
    build_fill_order_instructions,
    assemble_transaction,
    # Unlock keys
    encode_unlock_key,
    decode_unlock_key,
    is_valid_unlock_key,
    sign_unlock_key,
    # Types
    OrderLayout,
    OrderRecord,
    MintInfo,
    OrderDescriptor,
    CreateOrderParams,
    FillOrderParams,
    # Errors
    ErrorKind,
    P2PSwapError,
    DecodeError,
    ValidationError,
    DomainError,
    MissingUnlockKeyError,
)
from .shared import build_order_link, parse_order_link

__all__ = [
    "__version__",
    "program",
    "shared",
    "ClientConfig",
    "P2PSwapClient",
    "PROGRAM_ID",
    "deserialize_order_record",
    "deserialize_order_record_any",
    "serialize_order_record",
    "get_order_wallet_authority_pda",
    "get_order_wallet_address",
    "get_order_pda",
    "check_order",
    "validate_order_record",
    "compute_buy_token_amount",
    "build_create_order_instruction",
    "build_fill_order_instruction",
    "build_ed25519_verify_instruction",
    "build_create_order_instructions",
    "build_fill_order_instructions",
    "assemble_transaction",
    "encode_unlock_key",
    "decode_unlock_key",
    "is_valid_unlock_key",
    "sign_unlock_key",
    "OrderLayout",
    "OrderRecord",
    "MintInfo",
    "OrderDescriptor",
    "CreateOrderParams",
    "FillOrderParams",
    "ErrorKind",
    "P2PSwapError",
    "DecodeError",
    "ValidationError",
    "DomainError",
    "MissingUnlockKeyError",
    "build_order_link",
    "parse_order_link",
]
