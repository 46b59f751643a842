"""Ledger consistency: reported on-chain balances vs the locally reconstructed ones."""

from decimal import Decimal

from farmledger.domain.contracts import ZERO_ADDRESS

# Absolute drift tolerated between the two balances, in token units
BALANCE_TOLERANCE = Decimal(1)


def balance_matches(reported: Decimal, reconstructed: Decimal, tolerance: Decimal = BALANCE_TOLERANCE) -> bool:
    return abs(reconstructed - reported) <= tolerance
