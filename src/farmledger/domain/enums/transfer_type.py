from enum import Enum


class TransferType(str, Enum):
    """Classification of a token transfer by the protocol contract on the other side."""

    COMMON = "COMMON"
    LP_BUY = "LP_BUY"
    LP_SELL = "LP_SELL"
    PS_STAKE = "PS_STAKE"
    PS_EXIT = "PS_EXIT"
    REWARD = "REWARD"
