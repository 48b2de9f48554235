"""Main client for the P2P Swap SDK."""

import logging
from typing import Dict, Iterable, List, Optional, Tuple

from solana.rpc.async_api import AsyncClient
from solana.rpc.commitment import Commitment
from solders.hash import Hash
from solders.instruction import Instruction
from solders.pubkey import Pubkey
from solders.transaction import Transaction

from ..config import ClientConfig
from .accounts import (
    deserialize_mint_info,
    deserialize_order_record,
    deserialize_order_record_any,
    deserialize_token_account_mint,
)
from .constants import PROGRAM_ID
from .errors import AccountNotFoundError, DecodeError, OrderAddressInUseError
from .orders import (
    validate_create_order_params,
    validate_fill_order_params,
    validate_order_record,
)
from .pda import get_order_pda, get_order_wallet_for_seller
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
)

logger = logging.getLogger(__name__)


class P2PSwapClient:
    """Async client for interacting with the P2P Swap program.

    The client reads accounts and builds unsigned transactions. Signing and
    submission are left to the caller's wallet.
    """

    def __init__(
        self,
        connection: AsyncClient,
        program_id: Pubkey = PROGRAM_ID,
    ):
        """Initialize the client.

        Args:
            connection: Solana RPC async client
            program_id: P2P Swap program ID (defaults to the devnet deployment)
        """
        self.connection = connection
        self.program_id = program_id

    @classmethod
    def from_config(cls, config: ClientConfig) -> "P2PSwapClient":
        """Create a client (and its RPC connection) from a configuration."""
        connection = AsyncClient(config.rpc_url, commitment=Commitment(config.commitment))
        return cls(connection, program_id=config.program_id)

    # =========================================================================
    # Account Fetchers
    # =========================================================================

    async def get_order(self, address: Pubkey) -> OrderRecord:
        """Fetch and deserialize an order account of either layout."""
        response = await self.connection.get_account_info(address)

        if response.value is None:
            raise AccountNotFoundError(str(address), "Order")

        return deserialize_order_record_any(bytes(response.value.data))

    async def get_mint_info(self, address: Pubkey) -> MintInfo:
        """Fetch the decimals of a token mint."""
        response = await self.connection.get_account_info(address)

        if response.value is None:
            raise AccountNotFoundError(str(address), "Mint")

        return deserialize_mint_info(address, bytes(response.value.data))

    async def get_order_descriptor(self, address: Pubkey) -> OrderDescriptor:
        """Fetch an order together with both of its mints.

        Legacy records do not store the sell mint; it is read from the order
        wallet, which is a token account of that mint.
        """
        record = await self.get_order(address)
        sell_mint = await self._resolve_sell_mint(record)

        sell_token = await self.get_mint_info(sell_mint)
        buy_token = await self.get_mint_info(record.price_mint)

        return OrderDescriptor(
            address=address,
            record=record,
            sell_token=sell_token,
            buy_token=buy_token,
        )

    async def get_order_descriptor_checked(
        self,
        address: Pubkey,
        expected_seller: Optional[Pubkey] = None,
    ) -> OrderDescriptor:
        """Fetch an order and verify it against its derived addresses.

        Raises:
            ValidationError: If the order is inconsistent
        """
        descriptor = await self.get_order_descriptor(address)
        validate_order_record(
            descriptor.record,
            program_id=self.program_id,
            expected_address=address,
            expected_seller=expected_seller,
            sell_mint=descriptor.sell_token.address,
        )
        return descriptor

    async def get_orders(
        self,
        layout: OrderLayout = OrderLayout.CURRENT,
        fillable_only: bool = False,
    ) -> List[OrderDescriptor]:
        """Fetch all orders of one layout owned by the program.

        Accounts that fail to decode are skipped. Only current-layout orders
        carry their sell mint, so legacy orders resolve it through one
        additional lookup per order.
        """
        response = await self.connection.get_program_accounts(
            self.program_id,
            encoding="base64",
            filters=[layout.size],
        )

        orders: List[Tuple[Pubkey, OrderRecord, Pubkey]] = []
        for keyed in response.value:
            try:
                record = deserialize_order_record(bytes(keyed.account.data), layout)
                sell_mint = await self._resolve_sell_mint(record)
            except (DecodeError, AccountNotFoundError) as e:
                logger.warning(f"Skipping account {keyed.pubkey}: {e}")
                continue
            orders.append((keyed.pubkey, record, sell_mint))

        mints = await self._get_mint_infos(
            {sell_mint for _, _, sell_mint in orders}
            | {record.price_mint for _, record, _ in orders}
        )

        descriptors = []
        for address, record, sell_mint in orders:
            sell_token = mints.get(sell_mint)
            buy_token = mints.get(record.price_mint)
            if sell_token is None or buy_token is None:
                logger.warning(f"Skipping order {address}: mint not found")
                continue
            descriptor = OrderDescriptor(
                address=address,
                record=record,
                sell_token=sell_token,
                buy_token=buy_token,
            )
            if fillable_only and not descriptor.is_fillable:
                continue
            descriptors.append(descriptor)

        logger.debug(f"Fetched {len(descriptors)} orders ({layout.name} layout)")
        return descriptors

    async def account_exists(self, address: Pubkey) -> bool:
        """Check whether an account exists on-chain."""
        response = await self.connection.get_account_info(address)
        return response.value is not None

    async def get_slot(self) -> int:
        """Get the current slot."""
        response = await self.connection.get_slot()
        return response.value

    async def find_free_order_address(self, seller: Pubkey) -> Tuple[Pubkey, int]:
        """Derive the order address for the current slot.

        Raises:
            OrderAddressInUseError: If an account already exists there
        """
        slot = await self.get_slot()
        address, _ = get_order_pda(seller, slot, self.program_id)

        if await self.account_exists(address):
            raise OrderAddressInUseError(str(address), slot)

        return address, slot

    # =========================================================================
    # Transaction Builders
    # =========================================================================

    async def create_order(
        self, params: CreateOrderParams
    ) -> Tuple[Transaction, Pubkey]:
        """Build a create_order transaction.

        Returns:
            The unsigned transaction (fee payer: the signer) and the address
            of the order account it creates
        """
        validate_create_order_params(params)

        order_wallet = get_order_wallet_for_seller(
            params.signer, params.sell_token, self.program_id
        )
        order_wallet_exists = await self.account_exists(order_wallet)

        instructions, order_address = build_create_order_instructions(
            params, order_wallet_exists, self.program_id
        )
        transaction = await self._build_transaction(instructions, params.signer)

        logger.debug(
            f"Built create_order transaction for {order_address} "
            f"({len(instructions)} instructions)"
        )
        return transaction, order_address

    async def fill_order(self, params: FillOrderParams) -> Transaction:
        """Build a fill_order transaction.

        The request is validated before any network call.
        """
        validate_fill_order_params(params)

        instructions = build_fill_order_instructions(params, self.program_id)
        transaction = await self._build_transaction(instructions, params.signer)

        logger.debug(
            f"Built fill_order transaction for {params.order.address} "
            f"(amount {params.sell_token_amount})"
        )
        return transaction

    # =========================================================================
    # Internal Helpers
    # =========================================================================

    async def _resolve_sell_mint(self, record: OrderRecord) -> Pubkey:
        if record.token_mint is not None:
            return record.token_mint

        response = await self.connection.get_account_info(record.order_wallet)
        if response.value is None:
            raise AccountNotFoundError(str(record.order_wallet), "Order wallet")

        return deserialize_token_account_mint(bytes(response.value.data))

    async def _get_mint_infos(self, addresses: Iterable[Pubkey]) -> Dict[Pubkey, MintInfo]:
        addresses = list(addresses)
        if not addresses:
            return {}

        response = await self.connection.get_multiple_accounts(addresses)

        mints: Dict[Pubkey, MintInfo] = {}
        for address, account in zip(addresses, response.value):
            if account is None:
                continue
            try:
                mints[address] = deserialize_mint_info(address, bytes(account.data))
            except DecodeError as e:
                logger.warning(f"Ignoring mint {address}: {e}")
        return mints

    async def _build_transaction(
        self, instructions: List[Instruction], fee_payer: Pubkey
    ) -> Transaction:
        """Build a transaction with the given instructions."""
        blockhash = await self._get_blockhash()
        return assemble_transaction(instructions, fee_payer, blockhash)

    async def _get_blockhash(self) -> Hash:
        """Get the latest blockhash."""
        response = await self.connection.get_latest_blockhash()
        return response.value.blockhash
