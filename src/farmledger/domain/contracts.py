"""Protocol contract addresses (Ethereum mainnet, lowercase)."""

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

FARM_TOKEN = "0xa0246c9032bc3a600820415ae600c6388619a14d"
USDC_TOKEN = "0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48"
WETH_TOKEN = "0xc02aaa39b223fe8d0a0e5c4f27ead9083c756cc2"

# Profit-share staking pools: FARM sent here is a stake, FARM sent from here an exit
PS_ADDRESSES: frozenset[str] = frozenset({
    "0x8f5adc58b32d4e5ca02eac0e293d35855999436c",  # ST_PS
    "0x25550cccbd68533fa04bfd3e3ac4d09f9e00fc50",  # PS
    "0x59258f4e15a5fc74a7284055a8094f58108dbd4f",  # PS_V0
})

# Uniswap V2 pairs containing FARM: pair -> (other coin, other coin decimals)
LP_PAIR_COINS: dict[str, tuple[str, int]] = {
    "0x514906fc121c7878424a5c928cad1852cc545892": (USDC_TOKEN, 6),  # UNI_LP_USDC_FARM
    "0x56feaccb7f750b997b36a68625c7c596f0b41a58": (WETH_TOKEN, 18),  # UNI_LP_WETH_FARM
}
LP_PAIRS: frozenset[str] = frozenset(LP_PAIR_COINS)

# Contracts that pay FARM rewards
REWARD_POOLS: frozenset[str] = frozenset({
    "0xe20c31e3d08027f5aface84a3a46b7b3b165053c",  # NotifyHelper
    "0x99b0d6641a63ce173e6eb063b3d3aed9a35cf9bf",  # FARM/USDC reward pool
    "0x6555c79a8829b793f332f1535b0efb1fe4c11958",  # FARM/WETH reward pool
})
