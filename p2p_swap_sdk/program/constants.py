"""Constants for the P2P Swap program."""

from solders.pubkey import Pubkey

# ============================================================================
# PROGRAM IDS
# ============================================================================

# P2P Swap program deployed on devnet
PROGRAM_ID = Pubkey.from_string("AzVuKVf8qQjHBTyjEUZbr6zRvinZvjpuFZWMXPd76Fzx")

TOKEN_PROGRAM_ID = Pubkey.from_string("TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA")
ASSOCIATED_TOKEN_PROGRAM_ID = Pubkey.from_string(
    "ATokenGPvbdGVxr1b2hvZbsiqW5xWH25efTNsLJA8knL"
)
SYSTEM_PROGRAM_ID = Pubkey.from_string("11111111111111111111111111111111")
ED25519_PROGRAM_ID = Pubkey.from_string("Ed25519SigVerify111111111111111111111111111")

CLOCK_SYSVAR_ID = Pubkey.from_string("SysvarC1ock11111111111111111111111111111111")
INSTRUCTIONS_SYSVAR_ID = Pubkey.from_string(
    "Sysvar1nstructions1111111111111111111111111"
)

# ============================================================================
# PDA SEEDS
# ============================================================================

SEED_ORDER_WALLET_AUTHORITY = b"OrderWalletAuthority"
SEED_ORDER_ACCOUNT = b"OrderAccount"

# ============================================================================
# SIZES
# ============================================================================

PUBKEY_SIZE = 32
SIGNATURE_SIZE = 64
MAX_U64 = 2**64 - 1

ORDER_ACCOUNT_SIZE = 169
LEGACY_ORDER_ACCOUNT_SIZE = 137

# SPL token program layouts
MINT_ACCOUNT_SIZE = 82
MINT_DECIMALS_OFFSET = 44
MINT_IS_INITIALIZED_OFFSET = 45
TOKEN_ACCOUNT_MINT_OFFSET = 0

# ============================================================================
# ORDER ACCOUNT OFFSETS (current 169-byte layout)
# ============================================================================

ORDER_CREATION_SLOT_OFFSET = 0
ORDER_SELLER_OFFSET = 8
ORDER_SELL_AMOUNT_OFFSET = 40
ORDER_WALLET_OFFSET = 48
ORDER_TOKEN_MINT_OFFSET = 80
ORDER_PRICE_MINT_OFFSET = 112
ORDER_BUY_AMOUNT_OFFSET = 144
ORDER_MIN_SELL_AMOUNT_OFFSET = 152
ORDER_REMAINS_TO_FILL_OFFSET = 160
ORDER_IS_PRIVATE_OFFSET = 168

# ============================================================================
# ORDER ACCOUNT OFFSETS (legacy 137-byte layout, no token_mint)
# ============================================================================

LEGACY_ORDER_PRICE_MINT_OFFSET = 80
LEGACY_ORDER_BUY_AMOUNT_OFFSET = 112
LEGACY_ORDER_MIN_SELL_AMOUNT_OFFSET = 120
LEGACY_ORDER_REMAINS_TO_FILL_OFFSET = 128
LEGACY_ORDER_IS_PRIVATE_OFFSET = 136

# ============================================================================
# ED25519 INSTRUCTION LAYOUT
# ============================================================================

ED25519_HEADER_SIZE = 2
ED25519_OFFSETS_SIZE = 14
ED25519_DATA_START = ED25519_HEADER_SIZE + ED25519_OFFSETS_SIZE
ED25519_CURRENT_INSTRUCTION = 0xFFFF
