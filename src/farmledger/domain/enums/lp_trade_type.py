from enum import Enum


class LpTradeType(str, Enum):
    """What a pair event did with the tracked token."""

    BUY = "BUY"
    SELL = "SELL"
    ADD = "ADD"
    REMOVE = "REMOVE"
