"""Fixed network constants — Aave V3 on Base Sepolia."""
from __future__ import annotations

NETWORK_ID = "base-sepolia"
EXPLORER_URL = "https://sepolia.basescan.org"

AAVE_POOL_ADDRESS = "0x07eA79F68B2B3df564D0A34F8e19D9B1e339814b"
USDC_ADDRESS = "0x036CbD53842c5426634e7929541eC2318f3dCF7e"

# ---------------------------------------------------------------------------
# Fixed-point scaling
# ---------------------------------------------------------------------------

USDC_DECIMALS = 6
BASE_CURRENCY_DECIMALS = 8
PERCENT_DECIMALS = 2
HEALTH_FACTOR_DECIMALS = 18

# ---------------------------------------------------------------------------
# Pool call parameters
# ---------------------------------------------------------------------------

VARIABLE_RATE_MODE = 2
REFERRAL_CODE = 0

# ---------------------------------------------------------------------------
# Contract function signatures
# ---------------------------------------------------------------------------

GET_USER_ACCOUNT_DATA = "getUserAccountData(address)"
USER_ACCOUNT_DATA_OUTPUTS = (
    "uint256",  # totalCollateralBase
    "uint256",  # totalDebtBase
    "uint256",  # availableBorrowsBase
    "uint256",  # currentLiquidationThreshold
    "uint256",  # ltv
    "uint256",  # healthFactor
)

SUPPLY = "supply(address,uint256,address,uint16)"
BORROW = "borrow(address,uint256,uint256,uint16,address)"
REPAY = "repay(address,uint256,uint256,address)"
WITHDRAW = "withdraw(address,uint256,address)"

BALANCE_OF = "balanceOf(address)"
APPROVE = "approve(address,uint256)"
