"""Static signature table for the protocol's contract surface.

Names may carry a "#Variant" suffix so overloads of one event (same name,
different parameters) can live side by side; the suffix is not hashed.
"""

from farmledger.abi.types import Param, indexed, param

_A = "address"
_U = "uint256"


def _p(*type_names: str) -> list[Param]:
    return [param(t) for t in type_names]


# Vaults, strategies, reward pools, profit share
HARVEST_SIGNATURES: dict[str, list[Param]] = {
    "SmartContractRecorded": [indexed(_A), indexed(_A)],
    "addVaultAndStrategy": _p(_A, _A),
    "exit": [],
    "stake": _p(_U),
    "migrateInOneTx": _p(_A, _A, _A, _A, _A),
    "Withdraw": [indexed(_A), param(_U)],
    "Deposit": [indexed(_A), param(_U)],
    "Invest": _p(_U),
    "StrategyAnnounced": _p(_A, _U),
    "StrategyChanged": _p(_A, _A),
    "Staked": [indexed(_A), param(_U)],
    "Withdrawn": [indexed(_A), param(_U)],
    "RewardPaid": [indexed(_A), param(_U)],
    "RewardAdded": _p(_U),
    "Migrated": [indexed(_A), param(_U), param(_U)],
    "OwnershipTransferred": [indexed(_A), indexed(_A)],
    "Staked#V2": [indexed(_A), param(_U), param(_U), param(_U), param(_U), param(_U)],
    "Withdraw#V2": [indexed(_A), indexed(_U), param(_U)],
    "ProfitLogInReward": _p(_U, _U, _U),
    "SharePriceChangeLog": [indexed(_A), indexed(_A), param(_U), param(_U), param(_U)],
    "Deposit#V2": [indexed(_A), indexed(_U), param(_U)],
    "Rewarded": [indexed(_A), indexed(_A), param(_U)],
    "RewardDenied": [indexed(_A), param(_U)],
    "UpdateLiquidityLimit": _p(_A, _U, _U, _U, _U),
    "underlyingBalanceInVault": [],
    "underlyingBalanceWithInvestment": [],
    "governance": [],
    "controller": [],
    "underlying": [],
    "strategy": [],
    "withdrawAll": [],
    "getPricePerFullShare": [],
    "doHardWork": [],
    "doHardWork#V2": _p(_A),
    "rebalance": [],
    "setStrategy": _p(_A),
    "setVaultFractionToInvest": _p(_U, _U),
    "deposit": _p(_U),
    "depositFor": _p(_U, _A),
    "withdraw": _p(_U),
    "underlyingBalanceWithInvestmentForHolder": _p(_A),
    "depositAll": _p("uint256[]", "address[]"),
    "getReward": [],
    "notifyPoolsIncludingProfitShare": _p("uint256[]", "address[]", _U, _U, _U),
    "notifyProfitSharing": [],
    "provideLoan": [],
    "withdrawAllToVault": [],
    "tend": [],
    "harvest": [],
    "notifyPools": _p("uint256[]", "address[]", _U),
    "poolNotifyFixedTarget": _p(_A, _U),
    "sellToUniswap": _p("address[]", _U, _U, "bool"),
    "executeMint": _p(_U),
}

# ERC-20 surface
ERC20_SIGNATURES: dict[str, list[Param]] = {
    "Transfer": [indexed(_A), indexed(_A), param(_U)],
    "Approval": [indexed(_A), indexed(_A), param(_U)],
    "transfer": _p(_A, _U),
    "transferFrom": _p(_A, _A, _U),
    "approve": _p(_A, _U),
    "allowance": _p(_A, _A),
    "increaseAllowance": _p(_A, _U),
    "decreaseAllowance": _p(_A, _U),
    "balanceOf": _p(_A),
    "decimals": [],
    "mint": _p(_A, _U),
    "addMinter": _p(_A),
    "renounceMinter": [],
    "delegate": [],
}

# Uniswap V2 pair events and router calls
UNISWAP_SIGNATURES: dict[str, list[Param]] = {
    "Swap": [indexed(_A), param(_U), param(_U), param(_U), param(_U), indexed(_A)],
    "Mint": [indexed(_A), param(_U), param(_U)],
    "Burn": [indexed(_A), param(_U), param(_U), indexed(_A)],
    "Sync": _p("uint112", "uint112"),
    "addLiquidity": _p(_A, _A, _U, _U, _U, _U, _A, _U),
    "addLiquidityETH": _p(_A, _U, _U, _U, _A, _U),
    "removeLiquidity": _p(_A, _A, _U, _U, _U, _A, _U),
    "removeLiquidityETH": _p(_A, _U, _U, _U, _A, _U),
    "removeLiquidityWithPermit": _p(_A, _A, _U, _U, _U, _A, _U, "bool", "uint8", "bytes32", "bytes32"),
    "removeLiquidityETHWithPermit": _p(_A, _U, _U, _U, _A, _U, "bool", "uint8", "bytes32", "bytes32"),
    "removeLiquidityETHSupportingFeeOnTransferTokens": _p(_A, _U, _U, _U, _A, _U),
    "removeLiquidityETHWithPermitSupportingFeeOnTransferTokens": _p(
        _A, _U, _U, _U, _A, _U, "bool", "uint8", "bytes32", "bytes32",
    ),
    "swapExactTokensForTokens": _p(_U, _U, "address[]", _A, _U),
    "swapTokensForExactTokens": _p(_U, _U, "address[]", _A, _U),
    "swapExactETHForTokens": _p(_U, "address[]", _A, _U),
    "swapTokensForExactETH": _p(_U, _U, "address[]", _A, _U),
    "swapExactTokensForETH": _p(_U, _U, "address[]", _A, _U),
    "swapETHForExactTokens": _p(_U, "address[]", _A, _U),
    "swapExactTokensForTokensSupportingFeeOnTransferTokens": _p(_U, _U, "address[]", _A, _U),
    "swapExactETHForTokensSupportingFeeOnTransferTokens": _p(_U, "address[]", _A, _U),
    "swapExactTokensForETHSupportingFeeOnTransferTokens": _p(_U, _U, "address[]", _A, _U),
    "ZapIn": _p(_A, _A, _A, _A, _U, _U),
}

# Balancer pools and exchange proxy
BALANCER_SIGNATURES: dict[str, list[Param]] = {
    "swap": _p(_A, _A, _U, _U, _U, _A, "address[]", "bytes", "uint256[]", "uint256[]"),
    "bind": _p(_A, "uint", "uint"),
    "rebind": _p(_A, "uint", "uint"),
    "unbind": _p(_A),
    "gulp": _p(_A),
    "swapExactAmountIn": _p(_A, "uint", _A, "uint", "uint"),
    "swapExactAmountOut": _p(_A, "uint", _A, "uint", "uint"),
    "joinswapExternAmountIn": _p(_A, "uint", "uint"),
    "joinswapPoolAmountOut": _p(_A, "uint", "uint"),
    "exitswapPoolAmountIn": _p(_A, "uint", "uint"),
    "exitswapExternAmountOut": _p(_A, "uint", "uint"),
    "viewSplitExactOut": _p(_A, _A, "uint", "uint"),
    "viewSplitExactIn": _p(_A, _A, "uint", "uint"),
    "smartSwapExactOut": _p(_A, _A, "uint", "uint", "uint"),
    "smartSwapExactIn": _p(_A, _A, "uint", "uint", "uint"),
}

# Deployer / governance admin calls
GOVERNANCE_SIGNATURES: dict[str, list[Param]] = {
    "execute": _p(_A, "bytes"),
    "setStorage": _p(_A),
    "setFeeRewardForwarder": _p(_A),
    "setRewardDistribution": _p(_A),
    "setConversionPath": _p(_A, _A, "address[]"),
    "setPath": _p("bytes32", _A, _A, "address[]"),
    "setLiquidityLoanTarget": _p(_U),
    "settleLoan": _p(_U),
    "addDex": _p("bytes32", _A),
    "setController": _p(_A),
    "setHardRewards": _p(_A),
    "addVault": _p(_A),
    "setTokenPool": _p(_A),
    "setOperator": _p(_A),
    "setTeam": _p(_A),
    "notifyRewardAmount": _p(_U),
    "addHardWorker": _p(_A),
}

ALL_SIGNATURES: tuple[dict[str, list[Param]], ...] = (
    HARVEST_SIGNATURES,
    ERC20_SIGNATURES,
    UNISWAP_SIGNATURES,
    BALANCER_SIGNATURES,
    GOVERNANCE_SIGNATURES,
)
