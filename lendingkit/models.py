"""Data models — all frozen (immutable)."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AccountPosition:
    """Aave account snapshot plus wallet USDC balance, as raw fixed-point integers.

    Base-currency fields carry 8 decimals, percentages 2, the health factor 18
    and the USDC balance 6.
    """

    address: str
    total_collateral_base: int
    total_debt_base: int
    available_borrows_base: int
    current_liquidation_threshold: int
    ltv: int
    health_factor: int
    usdc_balance: int


# ---------------------------------------------------------------------------
# Transaction outcomes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Succeeded:
    """The pool call was confirmed on-chain."""

    tx_hash: str
    approval_tx_hash: str | None = None


@dataclass(frozen=True)
class ApprovalFailed:
    """The USDC approval did not confirm; the pool was never called."""

    error: str


@dataclass(frozen=True)
class ActionFailed:
    """The pool call failed.

    For approve-then-act flows ``approval_tx_hash`` is set: the allowance was
    granted but the position is unchanged.
    """

    error: str
    approval_tx_hash: str | None = None


ActionResult = Succeeded | ApprovalFailed | ActionFailed
