"""Tests for unlock key encoding, signing and verification."""

import base58
import pytest
from solders.keypair import Keypair
from solders.pubkey import Pubkey

from p2p_swap_sdk.program import (
    decode_unlock_key,
    encode_unlock_key,
    is_valid_unlock_key,
    sign_unlock_key,
    verify_unlock_key,
)


class TestUnlockKeyCodec:
    def test_round_trip(self):
        signature = bytes(range(64))
        encoded = encode_unlock_key(signature)

        assert encoded == base58.b58encode(signature).decode()
        assert decode_unlock_key(encoded) == signature

    def test_encode_rejects_wrong_length(self):
        with pytest.raises(ValueError):
            encode_unlock_key(bytes(63))

    @pytest.mark.parametrize(
        "value",
        [
            None,
            "",
            "0OIl",  # characters outside the base-58 alphabet
            base58.b58encode(bytes(range(1, 33))).decode(),  # 32 bytes
            base58.b58encode(bytes(range(1, 66))).decode(),  # 65 bytes
        ],
    )
    def test_decode_invalid_returns_none(self, value):
        assert decode_unlock_key(value) is None
        assert not is_valid_unlock_key(value)

    def test_is_valid(self):
        assert is_valid_unlock_key(encode_unlock_key(bytes([7]) * 64))


class TestSignUnlockKey:
    def test_signs_order_address(self):
        seller = Keypair()
        order = Pubkey.new_unique()

        signature = sign_unlock_key(order, seller)

        assert len(signature) == 64
        assert verify_unlock_key(seller.pubkey(), order, signature)

    def test_matches_solders_signature(self):
        seller = Keypair()
        order = Pubkey.new_unique()

        assert sign_unlock_key(order, seller) == bytes(seller.sign_message(bytes(order)))

    def test_wrong_seller_fails(self):
        order = Pubkey.new_unique()
        signature = sign_unlock_key(order, Keypair())
        assert not verify_unlock_key(Keypair().pubkey(), order, signature)

    def test_wrong_order_fails(self):
        seller = Keypair()
        signature = sign_unlock_key(Pubkey.new_unique(), seller)
        assert not verify_unlock_key(seller.pubkey(), Pubkey.new_unique(), signature)

    def test_malformed_signature_fails(self):
        assert not verify_unlock_key(Keypair().pubkey(), Pubkey.new_unique(), bytes(10))
