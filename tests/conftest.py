"""Pytest configuration and shared fixtures."""

import os

import pytest
from solders.keypair import Keypair
from solders.pubkey import Pubkey

from p2p_swap_sdk.program import (
    PROGRAM_ID,
    MintInfo,
    OrderDescriptor,
    OrderRecord,
    get_order_pda,
    get_order_wallet_for_seller,
)


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (run offline)")
    config.addinivalue_line("markers", "devnet: Integration tests against devnet")


def pytest_collection_modifyitems(config, items):
    """Skip devnet tests unless explicitly requested."""
    run_devnet = config.getoption("-k", default="") and "devnet" in config.getoption("-k", default="")

    for item in items:
        if "test_devnet" in str(item.fspath):
            if not run_devnet and "DEVNET_TESTS" not in os.environ:
                item.add_marker(pytest.mark.skip(reason="Devnet tests skipped by default. Set DEVNET_TESTS=1 or use -k devnet"))


@pytest.fixture
def seller() -> Keypair:
    return Keypair()


@pytest.fixture
def sell_mint() -> Pubkey:
    return Pubkey.new_unique()


@pytest.fixture
def buy_mint() -> Pubkey:
    return Pubkey.new_unique()


@pytest.fixture
def make_order(seller, sell_mint, buy_mint):
    """Factory for an internally consistent order and its address.

    Keyword overrides replace record fields after derivation, so they can be
    used to build tampered orders.
    """

    def _make(creation_slot=1000, is_private=False, **overrides):
        seller_pubkey = seller.pubkey()
        address, _ = get_order_pda(seller_pubkey, creation_slot, PROGRAM_ID)
        fields = dict(
            creation_slot=creation_slot,
            seller=seller_pubkey,
            sell_amount=300,
            order_wallet=get_order_wallet_for_seller(seller_pubkey, sell_mint, PROGRAM_ID),
            token_mint=sell_mint,
            price_mint=buy_mint,
            buy_amount=900,
            min_sell_amount=10,
            remains_to_fill=300,
            is_private=is_private,
        )
        fields.update(overrides)
        return address, OrderRecord(**fields)

    return _make


@pytest.fixture
def make_descriptor(make_order, sell_mint, buy_mint):
    """Factory for an order descriptor with 6-decimal sell and 9-decimal buy tokens."""

    def _make(**kwargs):
        address, record = make_order(**kwargs)
        return OrderDescriptor(
            address=address,
            record=record,
            sell_token=MintInfo(address=sell_mint, decimals=6),
            buy_token=MintInfo(address=buy_mint, decimals=9),
        )

    return _make
