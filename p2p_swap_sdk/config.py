"""Client configuration for the P2P Swap SDK."""

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

from solders.pubkey import Pubkey

from .program.constants import PROGRAM_ID

LOCALNET_RPC_URL = "http://127.0.0.1:8899"
DEVNET_RPC_URL = "https://api.devnet.solana.com"
DEFAULT_COMMITMENT = "confirmed"

ENV_RPC_URL = "P2P_SWAP_RPC_URL"
ENV_PROGRAM_ID = "P2P_SWAP_PROGRAM_ID"
ENV_COMMITMENT = "P2P_SWAP_COMMITMENT"

VALID_COMMITMENTS = ("processed", "confirmed", "finalized")


@dataclass
class ClientConfig:
    """Configuration for the RPC-backed client."""

    rpc_url: str = DEVNET_RPC_URL
    program_id: Pubkey = field(default_factory=lambda: PROGRAM_ID)
    commitment: str = DEFAULT_COMMITMENT

    def __post_init__(self):
        if self.commitment not in VALID_COMMITMENTS:
            raise ValueError(
                f"Invalid commitment: {self.commitment} "
                f"(expected one of {', '.join(VALID_COMMITMENTS)})"
            )

    @classmethod
    def default(cls) -> "ClientConfig":
        """Create default config (devnet, where the program is deployed)."""
        return cls()

    @classmethod
    def devnet(cls) -> "ClientConfig":
        """Create config pointing at the public devnet RPC."""
        return cls(rpc_url=DEVNET_RPC_URL)

    @classmethod
    def localnet(cls) -> "ClientConfig":
        """Create config pointing at a local test validator."""
        return cls(rpc_url=LOCALNET_RPC_URL)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ClientConfig":
        """Create config from ``P2P_SWAP_*`` environment variables.

        Unset variables keep their defaults.

        Raises:
            ValueError: If the program id or commitment is malformed
        """
        env = os.environ if environ is None else environ
        config = cls(
            rpc_url=env.get(ENV_RPC_URL, DEVNET_RPC_URL),
            commitment=env.get(ENV_COMMITMENT, DEFAULT_COMMITMENT),
        )

        program_id = env.get(ENV_PROGRAM_ID)
        if program_id:
            config.program_id = Pubkey.from_string(program_id)

        return config

    def with_rpc_url(self, rpc_url: str) -> "ClientConfig":
        """Set the RPC endpoint."""
        self.rpc_url = rpc_url
        return self

    def with_program_id(self, program_id: Pubkey) -> "ClientConfig":
        """Set the program id (e.g. a devnet deployment)."""
        self.program_id = program_id
        return self
