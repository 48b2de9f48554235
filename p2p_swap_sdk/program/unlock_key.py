"""Unlock keys for private orders.

An unlock key is the seller's ed25519 signature over the 32 raw bytes of the
order account address. It travels as a base-58 string (for example inside a
shareable order link) and is checked on-chain through an Ed25519 verify
instruction placed before the fill instruction.
"""

from typing import Optional

import base58
import nacl.exceptions
from nacl.signing import SigningKey, VerifyKey
from solders.keypair import Keypair
from solders.pubkey import Pubkey

from .constants import SIGNATURE_SIZE


def encode_unlock_key(signature: bytes) -> str:
    """Encode a 64-byte signature as a base-58 unlock key.

    Raises:
        ValueError: If the signature is not 64 bytes
    """
    if len(signature) != SIGNATURE_SIZE:
        raise ValueError(
            f"Unlock key signature must be {SIGNATURE_SIZE} bytes, got {len(signature)}"
        )
    return base58.b58encode(bytes(signature)).decode("ascii")


def decode_unlock_key(value: Optional[str]) -> Optional[bytes]:
    """Decode a base-58 unlock key.

    Returns None (never raises) for empty input, malformed base-58, or a
    decoded length other than 64 bytes, so it can be used to validate user
    input as it is typed.
    """
    if not value:
        return None

    try:
        decoded = base58.b58decode(value)
    except ValueError:
        return None

    if len(decoded) != SIGNATURE_SIZE:
        return None
    return decoded


def is_valid_unlock_key(value: Optional[str]) -> bool:
    """Check whether a string decodes to a 64-byte unlock key."""
    return decode_unlock_key(value) is not None


def sign_unlock_key(order_address: Pubkey, keypair: Keypair) -> bytes:
    """Produce the unlock key of a private order with the seller's keypair."""
    # solders Keypair stores the full 64-byte secret (seed + public key)
    seed = bytes(keypair)[:32]
    signing_key = SigningKey(seed)
    return signing_key.sign(bytes(order_address)).signature


def verify_unlock_key(seller: Pubkey, order_address: Pubkey, unlock_key: bytes) -> bool:
    """Check an unlock key against the seller's public key.

    Returns True if the signature is valid, False otherwise. The on-chain
    Ed25519 program remains the authority; this is a local pre-check.
    """
    if len(unlock_key) != SIGNATURE_SIZE:
        return False

    try:
        VerifyKey(bytes(seller)).verify(bytes(order_address), bytes(unlock_key))
        return True
    except (nacl.exceptions.BadSignatureError, ValueError):
        return False
