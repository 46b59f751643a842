"""Chain client interface the ingestion core depends on."""

from abc import ABC, abstractmethod
from decimal import Decimal

from farmledger.domain.models.log import RawLog


class ChainClient(ABC):
    """Read-only access to an EVM chain. Implementations must be safe for concurrent use."""

    @abstractmethod
    async def fetch_transaction(self, tx_hash: str) -> dict:
        """Transaction object (from, to, input, ...)."""

    @abstractmethod
    async def fetch_transaction_receipt(self, tx_hash: str) -> dict:
        """Receipt of a mined transaction (from, status, logs, ...)."""

    @abstractmethod
    async def get_block_timestamp(self, block_hash: str) -> int:
        """Unix timestamp of a block."""

    @abstractmethod
    async def get_block_timestamp_by_number(self, block_number: int) -> int:
        """Unix timestamp of a block on the canonical chain."""

    @abstractmethod
    async def fetch_average_gas_price(self) -> Decimal:
        """Current gas price in gwei."""

    @abstractmethod
    async def get_block_number(self) -> int:
        """Latest block number."""

    @abstractmethod
    async def get_logs(self, addresses: list[str], from_block: int, to_block: int) -> list[RawLog]:
        """Logs emitted by `addresses` in the inclusive block range, in chain order."""

    @abstractmethod
    async def balance_of(self, token: str, holder: str, block: int) -> int:
        """ERC-20 balance of `holder` at `block`, in the token's smallest unit."""
