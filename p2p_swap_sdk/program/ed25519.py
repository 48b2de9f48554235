"""Ed25519 verification instruction helper for the P2P Swap SDK.

The Ed25519 program verifies signatures natively. Filling a private order
requires one verify instruction, binding the seller's public key, the order
address bytes (message) and the unlock key (signature), placed before the
fill instruction; the P2P Swap program inspects it through the instructions
sysvar.
"""

from dataclasses import dataclass

from solders.instruction import Instruction

from .constants import (
    ED25519_CURRENT_INSTRUCTION,
    ED25519_DATA_START,
    ED25519_PROGRAM_ID,
    PUBKEY_SIZE,
    SIGNATURE_SIZE,
)
from .utils import encode_u16


@dataclass(frozen=True)
class Ed25519SignatureOffsets:
    """Offsets for Ed25519 signature verification data."""

    signature_offset: int  # u16
    signature_instruction_index: int  # u16
    public_key_offset: int  # u16
    public_key_instruction_index: int  # u16
    message_data_offset: int  # u16
    message_data_size: int  # u16
    message_instruction_index: int  # u16

    def serialize(self) -> bytes:
        return (
            encode_u16(self.signature_offset)
            + encode_u16(self.signature_instruction_index)
            + encode_u16(self.public_key_offset)
            + encode_u16(self.public_key_instruction_index)
            + encode_u16(self.message_data_offset)
            + encode_u16(self.message_data_size)
            + encode_u16(self.message_instruction_index)
        )


def build_ed25519_verify_instruction(
    pubkey: bytes,
    signature: bytes,
    message: bytes,
) -> Instruction:
    """Build an Ed25519 verify instruction for a single signature.

    The instruction data layout:
    - num_signatures (1 byte): always 1
    - padding (1 byte): zero
    - offsets struct (14 bytes, u16 LE each), every instruction index 0xFFFF
      (data lives in this instruction)
    - public key (32) at offset 16
    - signature (64) at offset 48
    - message (variable) at offset 112
    """
    if len(signature) != SIGNATURE_SIZE:
        raise ValueError(f"Signature must be {SIGNATURE_SIZE} bytes")
    if len(pubkey) != PUBKEY_SIZE:
        raise ValueError(f"Public key must be {PUBKEY_SIZE} bytes")

    public_key_offset = ED25519_DATA_START
    signature_offset = public_key_offset + PUBKEY_SIZE
    message_offset = signature_offset + SIGNATURE_SIZE

    offsets = Ed25519SignatureOffsets(
        signature_offset=signature_offset,
        signature_instruction_index=ED25519_CURRENT_INSTRUCTION,
        public_key_offset=public_key_offset,
        public_key_instruction_index=ED25519_CURRENT_INSTRUCTION,
        message_data_offset=message_offset,
        message_data_size=len(message),
        message_instruction_index=ED25519_CURRENT_INSTRUCTION,
    )

    data = bytearray()
    data.append(1)  # num_signatures
    data.append(0)  # padding
    data.extend(offsets.serialize())
    data.extend(pubkey)
    data.extend(signature)
    data.extend(message)

    return Instruction(
        program_id=ED25519_PROGRAM_ID,
        accounts=[],  # Ed25519 program takes no accounts
        data=bytes(data),
    )
