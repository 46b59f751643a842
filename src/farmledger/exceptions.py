"""Error taxonomy for decoding, enrichment and profit attribution."""


class FarmLedgerError(Exception):
    """Base class for all errors raised by farmledger."""


class ExternalServiceError(FarmLedgerError):
    """An RPC node or HTTP price provider failed or answered with an error. Retriable."""


class DecodeError(FarmLedgerError):
    """Base class for decode-time failures. Per-item, never fatal to a pipeline."""


class MalformedInput(DecodeError):
    """Call-data or log payload that can never be decoded."""


class UnknownMethod(DecodeError):
    """Method id that is not present in the signature registry."""

    def __init__(self, method_id: str) -> None:
        super().__init__(f"Unknown method id {method_id}")
        self.method_id = method_id


class UnsupportedType(DecodeError):
    """ABI type outside the supported closed set of kinds."""


class PriceUnavailable(FarmLedgerError):
    """No USD price for a record whose profit math needs one."""

    def __init__(self, token: str, block: int) -> None:
        super().__init__(f"Price not found for {token} at block {block}")
        self.token = token
        self.block = block


class InconsistentOwner(FarmLedgerError):
    """A COMMON transfer in an address history that neither sends nor receives for that address."""

    def __init__(self, address: str, transfer_id: str) -> None:
        super().__init__(f"Wrong owner {address} for transfer {transfer_id}")
        self.address = address
        self.transfer_id = transfer_id
