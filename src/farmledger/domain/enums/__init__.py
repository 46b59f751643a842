from farmledger.domain.enums.abi_kind import AbiKind
from farmledger.domain.enums.lp_trade_type import LpTradeType
from farmledger.domain.enums.process_status import ProcessStatus
from farmledger.domain.enums.transfer_type import TransferType

__all__ = [
    "AbiKind",
    "LpTradeType",
    "ProcessStatus",
    "TransferType",
]
