"""EventDecoder: raw log → registered event → typed event record."""

import logging

from farmledger.abi.decoder import INDETERMINATE, AbiDecoder
from farmledger.domain.models.events import LogEvent
from farmledger.domain.models.log import RawLog
from farmledger.events.base import BaseEventMapper
from farmledger.events.mappers import DEFAULT_MAPPERS

logger = logging.getLogger(__name__)


class EventDecoder:
    """Dispatches a log to the mapper for its event kind.

    Returns None (never raises) for logs outside the watched surface: no topics,
    unregistered topic0, or a registered name with no mapper. Decode errors
    (MalformedInput) propagate to the caller.
    """

    def __init__(self, abi_decoder: AbiDecoder, mappers: tuple[BaseEventMapper, ...] = DEFAULT_MAPPERS) -> None:
        self._abi = abi_decoder
        self._mappers: dict[str, BaseEventMapper] = {}
        for mapper in mappers:
            for name in mapper.EVENT_NAMES:
                self._mappers[name] = mapper

    def decode(self, log: RawLog) -> LogEvent | None:
        registry = self._abi.registry
        method_id = registry.resolve_method_id(log.topic0)
        if method_id is None:
            logger.debug("Unknown topic %s in tx %s", log.topic0, log.transaction_hash)
            return None

        entry = registry.entry(method_id)
        if entry is None:
            return None

        mapper = self._mappers.get(entry.name)
        if mapper is None:
            logger.info("No mapper for event %s in tx %s", entry.name, log.transaction_hash)
            return None

        values = self._abi.decode_log(log, entry.parameters)
        if values is INDETERMINATE:
            return None
        return mapper.map(entry.name, values, log)
