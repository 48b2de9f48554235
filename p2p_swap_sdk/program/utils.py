"""Byte-level helpers shared by the account codec and instruction builders.

All integers on the wire are unsigned little-endian.
"""

import struct
from decimal import Decimal

from solders.pubkey import Pubkey

from .constants import ASSOCIATED_TOKEN_PROGRAM_ID, PUBKEY_SIZE, TOKEN_PROGRAM_ID
from .errors import DerivationError

_UINT_FORMATS = {8: "<B", 16: "<H", 64: "<Q"}


def _encode_uint(value: int, bits: int) -> bytes:
    limit = (1 << bits) - 1
    if not 0 <= value <= limit:
        raise ValueError(f"u{bits} out of range: {value} (allowed 0..{limit})")
    return struct.pack(_UINT_FORMATS[bits], value)


def _decode_uint(data: bytes, offset: int, bits: int) -> int:
    width = bits // 8
    if offset < 0 or offset + width > len(data):
        raise ValueError(
            f"u{bits} at offset {offset} needs {width} bytes, buffer has {len(data)}"
        )
    return struct.unpack_from(_UINT_FORMATS[bits], data, offset)[0]


def encode_u8(value: int) -> bytes:
    """Raises ValueError outside [0, 255]."""
    return _encode_uint(value, 8)


def encode_u16(value: int) -> bytes:
    """Raises ValueError outside [0, 65535]."""
    return _encode_uint(value, 16)


def encode_u64(value: int) -> bytes:
    """Raises ValueError outside [0, 2^64 - 1]."""
    return _encode_uint(value, 64)


def decode_u8(data: bytes, offset: int = 0) -> int:
    return _decode_uint(data, offset, 8)


def decode_u64(data: bytes, offset: int = 0) -> int:
    return _decode_uint(data, offset, 64)


def decode_pubkey(data: bytes, offset: int = 0) -> Pubkey:
    """Copy 32 bytes at ``offset`` into a Pubkey; no curve check is made."""
    end = offset + PUBKEY_SIZE
    if offset < 0 or end > len(data):
        raise ValueError(
            f"pubkey at offset {offset} needs {PUBKEY_SIZE} bytes, buffer has {len(data)}"
        )
    return Pubkey.from_bytes(bytes(data[offset:end]))


def decode_bool(data: bytes, offset: int = 0) -> bool:
    """Any non-zero byte reads as True."""
    return _decode_uint(data, offset, 8) != 0


def get_associated_token_address(
    owner: Pubkey,
    mint: Pubkey,
    allow_owner_off_curve: bool = False,
    token_program_id: Pubkey = TOKEN_PROGRAM_ID,
) -> Pubkey:
    """Derive the associated token account of ``owner`` for ``mint``.

    Program-derived owners have no private key and lie off the ed25519
    curve; they must be allowed explicitly.

    Raises:
        DerivationError: If the owner is off-curve and that is not allowed
    """
    if not allow_owner_off_curve and not owner.is_on_curve():
        raise DerivationError(f"token owner {owner} is off curve")
    address, _ = Pubkey.find_program_address(
        [bytes(owner), bytes(token_program_id), bytes(mint)],
        ASSOCIATED_TOKEN_PROGRAM_ID,
    )
    return address


def amount_to_decimal(value: int, decimals: int) -> Decimal:
    """Convert a raw token amount to its decimal representation."""
    return Decimal(value).scaleb(-decimals)
