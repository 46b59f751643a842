"""Base event mapper interface."""

from abc import ABC, abstractmethod
from typing import Any

from farmledger.domain.models.events import LogEvent
from farmledger.domain.models.log import RawLog


class BaseEventMapper(ABC):
    """Turns a decoded value sequence into one typed event record.

    Subclasses declare EVENT_NAMES: the registered (possibly "#Variant"-suffixed)
    event names they understand.
    """

    MAPPER_NAME: str = "BaseEventMapper"
    EVENT_NAMES: frozenset[str] = frozenset()

    def can_map(self, event_name: str) -> bool:
        return event_name in self.EVENT_NAMES

    @abstractmethod
    def map(self, event_name: str, values: tuple[Any, ...], log: RawLog) -> LogEvent:
        """Build the event record. `values` are indexed-first, then data values."""

    def _meta(self, event_name: str, log: RawLog) -> dict[str, Any]:
        """Log metadata shared by every event record."""
        return {
            "event": event_name,
            "address": log.address.lower(),
            "block_hash": log.block_hash,
            "block_number": log.block_number,
            "tx_hash": log.transaction_hash,
            "log_index": log.log_index,
        }
