from farmledger.db.repos.lp_trade_repo import LpTradeRepo
from farmledger.db.repos.transfer_repo import TransferRepo

__all__ = ["LpTradeRepo", "TransferRepo"]
