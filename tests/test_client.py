"""Tests for the client module."""

import logging

import pytest
from solders.hash import Hash
from solders.keypair import Keypair
from solders.pubkey import Pubkey

from p2p_swap_sdk import ClientConfig
from p2p_swap_sdk.program import (
    ASSOCIATED_TOKEN_PROGRAM_ID,
    PROGRAM_ID,
    AccountNotFoundError,
    CreateOrderParams,
    FillOrderParams,
    InvalidAmountError,
    MissingUnlockKeyError,
    OrderAddressInUseError,
    OrderLayout,
    P2PSwapClient,
    SizeMismatchError,
    WalletMismatchError,
    get_order_pda,
    get_order_wallet_for_seller,
    serialize_order_record,
)


class MockConnection:
    """Mock Solana connection for testing.

    Serves account data from an in-memory map and records every call.
    """

    def __init__(self, accounts=None, slot=0):
        self.accounts = dict(accounts or {})
        self.slot = slot
        self.blockhash = Hash.new_unique()
        self.calls = []

    async def get_account_info(self, pubkey):
        self.calls.append("get_account_info")
        data = self.accounts.get(pubkey)
        return MockResponse(None if data is None else MockAccount(data))

    async def get_multiple_accounts(self, pubkeys):
        self.calls.append("get_multiple_accounts")
        return MockResponse(
            [
                None if self.accounts.get(key) is None else MockAccount(self.accounts[key])
                for key in pubkeys
            ]
        )

    async def get_program_accounts(self, program_id, encoding=None, filters=None):
        self.calls.append("get_program_accounts")
        size = filters[0]
        return MockResponse(
            [
                MockKeyedAccount(key, MockAccount(data))
                for key, data in self.accounts.items()
                if len(data) == size
            ]
        )

    async def get_slot(self):
        self.calls.append("get_slot")
        return MockResponse(self.slot)

    async def get_latest_blockhash(self):
        self.calls.append("get_latest_blockhash")
        return MockResponse(MockBlockhash(self.blockhash))


class MockResponse:
    def __init__(self, value):
        self.value = value


class MockAccount:
    def __init__(self, data):
        self.data = data


class MockKeyedAccount:
    def __init__(self, pubkey, account):
        self.pubkey = pubkey
        self.account = account


class MockBlockhash:
    def __init__(self, blockhash):
        self.blockhash = blockhash


def mint_data(decimals: int) -> bytes:
    data = bytearray(82)
    data[44] = decimals
    data[45] = 1
    return bytes(data)


def token_account_data(mint: Pubkey, owner: Pubkey) -> bytes:
    return bytes(mint) + bytes(owner) + bytes(101)


@pytest.fixture
def chain(make_order, sell_mint, buy_mint):
    """An order with both mints present on a mock chain."""
    address, record = make_order()
    connection = MockConnection(
        {
            address: serialize_order_record(record),
            sell_mint: mint_data(6),
            buy_mint: mint_data(9),
        },
        slot=2000,
    )
    return connection, address, record


class TestClientInit:
    def test_default_program_id(self):
        client = P2PSwapClient(MockConnection())
        assert client.program_id == PROGRAM_ID

    def test_custom_program_id(self):
        custom_id = Pubkey.new_unique()
        client = P2PSwapClient(MockConnection(), custom_id)
        assert client.program_id == custom_id

    def test_from_config(self):
        custom_id = Pubkey.new_unique()
        config = ClientConfig.devnet().with_program_id(custom_id)

        client = P2PSwapClient.from_config(config)

        assert client.program_id == custom_id
        assert client.connection is not None


class TestClientFetchers:
    @pytest.mark.asyncio
    async def test_get_order(self, chain):
        connection, address, record = chain
        client = P2PSwapClient(connection)

        assert await client.get_order(address) == record

    @pytest.mark.asyncio
    async def test_get_order_not_found(self):
        client = P2PSwapClient(MockConnection())

        with pytest.raises(AccountNotFoundError) as exc_info:
            await client.get_order(Pubkey.new_unique())
        assert "Order not found" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_get_order_wrong_size(self):
        address = Pubkey.new_unique()
        client = P2PSwapClient(MockConnection({address: bytes(100)}))

        with pytest.raises(SizeMismatchError):
            await client.get_order(address)

    @pytest.mark.asyncio
    async def test_get_order_descriptor(self, chain, sell_mint, buy_mint):
        connection, address, record = chain
        client = P2PSwapClient(connection)

        descriptor = await client.get_order_descriptor(address)

        assert descriptor.address == address
        assert descriptor.record == record
        assert descriptor.sell_token.address == sell_mint
        assert descriptor.sell_token.decimals == 6
        assert descriptor.buy_token.address == buy_mint
        assert descriptor.buy_token.decimals == 9

    @pytest.mark.asyncio
    async def test_legacy_descriptor_reads_mint_from_wallet(
        self, make_order, sell_mint, buy_mint
    ):
        address, record = make_order(token_mint=None)
        connection = MockConnection(
            {
                address: serialize_order_record(record),
                record.order_wallet: token_account_data(sell_mint, Pubkey.new_unique()),
                sell_mint: mint_data(6),
                buy_mint: mint_data(9),
            }
        )
        client = P2PSwapClient(connection)

        descriptor = await client.get_order_descriptor_checked(address)

        assert descriptor.record.layout == OrderLayout.LEGACY
        assert descriptor.sell_token.address == sell_mint

    @pytest.mark.asyncio
    async def test_descriptor_checked_rejects_tampered_wallet(
        self, make_order, sell_mint, buy_mint
    ):
        address, record = make_order(order_wallet=Pubkey.new_unique())
        connection = MockConnection(
            {
                address: serialize_order_record(record),
                sell_mint: mint_data(6),
                buy_mint: mint_data(9),
            }
        )
        client = P2PSwapClient(connection)

        with pytest.raises(WalletMismatchError):
            await client.get_order_descriptor_checked(address)

    @pytest.mark.asyncio
    async def test_get_orders(self, make_order, sell_mint, buy_mint):
        open_address, open_record = make_order(creation_slot=1)
        filled_address, filled_record = make_order(creation_slot=2, remains_to_fill=0)
        legacy_sized = Pubkey.new_unique()
        connection = MockConnection(
            {
                open_address: serialize_order_record(open_record),
                filled_address: serialize_order_record(filled_record),
                legacy_sized: bytes(137),
                sell_mint: mint_data(6),
                buy_mint: mint_data(9),
            }
        )
        client = P2PSwapClient(connection)

        orders = await client.get_orders()
        fillable = await client.get_orders(fillable_only=True)

        assert {order.address for order in orders} == {open_address, filled_address}
        assert [order.address for order in fillable] == [open_address]

    @pytest.mark.asyncio
    async def test_get_orders_skips_orders_with_missing_mint(
        self, make_order, sell_mint, caplog
    ):
        address, record = make_order()
        connection = MockConnection(
            {address: serialize_order_record(record), sell_mint: mint_data(6)}
        )
        client = P2PSwapClient(connection)

        with caplog.at_level(logging.WARNING, logger="p2p_swap_sdk.program.client"):
            orders = await client.get_orders()

        assert orders == []
        assert "mint not found" in caplog.text

    @pytest.mark.asyncio
    async def test_get_orders_skips_orders_priced_in_non_mint_accounts(
        self, make_order, sell_mint, buy_mint, caplog
    ):
        address, record = make_order()
        empty_account = Pubkey.new_unique()
        token_account = Pubkey.new_unique()
        empty_address, empty_priced = make_order(creation_slot=1001, price_mint=empty_account)
        token_address, token_priced = make_order(creation_slot=1002, price_mint=token_account)
        connection = MockConnection(
            {
                address: serialize_order_record(record),
                empty_address: serialize_order_record(empty_priced),
                token_address: serialize_order_record(token_priced),
                sell_mint: mint_data(6),
                buy_mint: mint_data(9),
                empty_account: b"",
                token_account: token_account_data(buy_mint, Pubkey.new_unique()),
            }
        )
        client = P2PSwapClient(connection)

        with caplog.at_level(logging.WARNING, logger="p2p_swap_sdk.program.client"):
            orders = await client.get_orders()

        assert [order.address for order in orders] == [address]
        assert f"Ignoring mint {empty_account}" in caplog.text
        assert f"Ignoring mint {token_account}" in caplog.text
        assert f"Skipping order {empty_address}: mint not found" in caplog.text
        assert f"Skipping order {token_address}: mint not found" in caplog.text

    @pytest.mark.asyncio
    async def test_account_exists(self, chain):
        connection, address, _ = chain
        client = P2PSwapClient(connection)

        assert await client.account_exists(address)
        assert not await client.account_exists(Pubkey.new_unique())

    @pytest.mark.asyncio
    async def test_find_free_order_address(self):
        seller = Keypair().pubkey()
        client = P2PSwapClient(MockConnection(slot=4242))

        address, slot = await client.find_free_order_address(seller)

        assert slot == 4242
        assert address == get_order_pda(seller, 4242)[0]

    @pytest.mark.asyncio
    async def test_find_free_order_address_in_use(self):
        seller = Keypair().pubkey()
        taken, _ = get_order_pda(seller, 4242)
        client = P2PSwapClient(MockConnection({taken: bytes(169)}, slot=4242))

        with pytest.raises(OrderAddressInUseError) as exc_info:
            await client.find_free_order_address(seller)
        assert exc_info.value.slot == 4242


class TestClientTransactions:
    def _create_params(self, **overrides):
        fields = dict(
            signer=Keypair().pubkey(),
            sell_token=Pubkey.new_unique(),
            buy_token=Pubkey.new_unique(),
            sell_amount=1000,
            buy_amount=10,
            min_sell_amount=100,
            creation_slot=99,
        )
        fields.update(overrides)
        return CreateOrderParams(**fields)

    @pytest.mark.asyncio
    async def test_create_order_creates_missing_wallet(self):
        connection = MockConnection()
        client = P2PSwapClient(connection)
        params = self._create_params()

        tx, order_address = await client.create_order(params)

        assert order_address == get_order_pda(params.signer, 99)[0]
        assert tx.message.recent_blockhash == connection.blockhash
        assert tx.message.account_keys[0] == params.signer
        assert len(tx.message.instructions) == 3
        program_ids = [
            tx.message.account_keys[ix.program_id_index] for ix in tx.message.instructions
        ]
        assert program_ids[0] == ASSOCIATED_TOKEN_PROGRAM_ID
        assert program_ids[2] == PROGRAM_ID

    @pytest.mark.asyncio
    async def test_create_order_with_existing_wallet(self):
        params = self._create_params()
        wallet = get_order_wallet_for_seller(params.signer, params.sell_token)
        client = P2PSwapClient(MockConnection({wallet: bytes(165)}))

        tx, _ = await client.create_order(params)

        assert len(tx.message.instructions) == 2

    @pytest.mark.asyncio
    async def test_create_order_invalid_amount_makes_no_calls(self):
        connection = MockConnection()
        client = P2PSwapClient(connection)

        with pytest.raises(InvalidAmountError):
            await client.create_order(self._create_params(min_sell_amount=1001))
        assert connection.calls == []

    @pytest.mark.asyncio
    async def test_fill_order(self, make_descriptor):
        connection = MockConnection()
        client = P2PSwapClient(connection)
        buyer = Keypair().pubkey()

        tx = await client.fill_order(FillOrderParams(buyer, make_descriptor(), 100))

        assert tx.message.account_keys[0] == buyer
        assert len(tx.message.instructions) == 2
        assert connection.calls == ["get_latest_blockhash"]

    @pytest.mark.asyncio
    async def test_private_fill_without_key_makes_no_calls(self, make_descriptor):
        connection = MockConnection()
        client = P2PSwapClient(connection)
        order = make_descriptor(is_private=True)

        with pytest.raises(MissingUnlockKeyError):
            await client.fill_order(FillOrderParams(Keypair().pubkey(), order, 100))
        assert connection.calls == []


class TestClientLegacyScan:
    @pytest.mark.asyncio
    async def test_legacy_scan_resolves_mints_through_wallets(
        self, make_order, sell_mint, buy_mint, caplog
    ):
        address, record = make_order(token_mint=None)
        orphan_address, orphan = make_order(
            creation_slot=7, token_mint=None, order_wallet=Pubkey.new_unique()
        )
        connection = MockConnection(
            {
                address: serialize_order_record(record),
                orphan_address: serialize_order_record(orphan),
                record.order_wallet: token_account_data(sell_mint, Pubkey.new_unique()),
                sell_mint: mint_data(6),
                buy_mint: mint_data(9),
            }
        )
        client = P2PSwapClient(connection)

        with caplog.at_level(logging.WARNING, logger="p2p_swap_sdk.program.client"):
            orders = await client.get_orders(layout=OrderLayout.LEGACY)

        assert [order.address for order in orders] == [address]
        assert orders[0].sell_token.address == sell_mint
        assert f"Skipping account {orphan_address}" in caplog.text
