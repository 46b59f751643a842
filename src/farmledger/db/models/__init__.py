from farmledger.db.models.lp_trade import LpTradeRecord
from farmledger.db.models.price_cache import PriceCache
from farmledger.db.models.transfer import TransferRecord

__all__ = [
    "LpTradeRecord",
    "PriceCache",
    "TransferRecord",
]
