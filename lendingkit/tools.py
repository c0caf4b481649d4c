"""
LangChain tools for the Aave V3 USDC position on Base Sepolia.

Every tool delegates to an injected ``LendingActions`` implementation and
returns a plain string for the agent:

    from lendingkit.tools import get_tools
    tools = get_tools(session.actions)

Transaction failures come back as text. The wording distinguishes a failed
approval (nothing changed) from a pool call that failed after the USDC
allowance was granted.
"""
from __future__ import annotations

import asyncio
from typing import Any, Type

from langchain_core.tools import BaseTool
from pydantic import BaseModel, Field

from .constants import EXPLORER_URL
from .models import ActionFailed, ActionResult, ApprovalFailed, Succeeded
from .protocols.aave.parser import InvalidAmountError, format_account_summary

_EXPLORER_HINT = (
    "This would return a transaction hash if successful; present it as an "
    f"explorer link in the form {EXPLORER_URL}/tx/<transaction_hash>."
)


# ── Input schemas ─────────────────────────────────────────────────────────────

class _NoInput(BaseModel):
    pass


class _AmountInput(BaseModel):
    amount: str = Field(
        description=(
            "Amount of USDC as a decimal string in whole tokens, "
            "e.g. '100' or '2.5'. Precision beyond 6 decimals is truncated."
        )
    )


# ── Result rendering ──────────────────────────────────────────────────────────

# action → (past tense, progressive phrase)
_PHRASES = {
    "supply": ("supplied to", "supplying USDC to"),
    "borrow": ("borrowed from", "borrowing USDC from"),
    "repay": ("repaid to", "repaying USDC to"),
    "withdraw": ("withdrawn from", "withdrawing USDC from"),
}


def describe_result(action: str, result: ActionResult) -> str:
    """Render an ActionResult as the text the agent sees."""
    done, doing = _PHRASES[action]
    if isinstance(result, Succeeded):
        return (
            f"USDC {done} Aave: {result.tx_hash}\n"
            f"  Explorer: {EXPLORER_URL}/tx/{result.tx_hash}"
        )
    if isinstance(result, ApprovalFailed):
        return (
            f"Sorry, the USDC spend approval failed, so nothing was sent to Aave "
            f"and your position is unchanged: {result.error}"
        )
    if isinstance(result, ActionFailed) and result.approval_tx_hash:
        return (
            f"Sorry, error {doing} Aave: {result.error}\n"
            f"  The USDC spend was approved in {result.approval_tx_hash} "
            f"but your position is unchanged."
        )
    return f"Sorry, error {doing} Aave: {result.error}"


# ── Tools ─────────────────────────────────────────────────────────────────────

class _LendingTool(BaseTool):
    """Base for tools bound to a ``LendingActions`` implementation."""

    actions: Any = Field(exclude=True)

    def _run(self, *args: Any, **kwargs: Any) -> str:
        return asyncio.run(self._arun(*args, **kwargs))


class _AmountTool(_LendingTool):
    args_schema: Type[BaseModel] = _AmountInput
    action: str = ""

    async def _arun(self, amount: str) -> str:
        try:
            result = await getattr(self.actions, self.action)(amount)
        except InvalidAmountError as exc:
            return f"{exc}. Please provide a positive USDC amount such as '100' or '2.5'."
        return describe_result(self.action, result)


class CheckAccountDataTool(_LendingTool):
    """
    Overview of the wallet's Aave account: collateral, debt, borrow capacity,
    liquidation threshold, LTV, health factor and USDC balance.
    Read-only. Errors propagate to the agent runtime.
    """

    name: str = "check_account_data"
    description: str = (
        "Retrieves an overview of the user's Aave account and USDC details, including "
        "wallet USDC balance, total supplied, total borrowed, available borrows, "
        "liquidation threshold, LTV and health factor. "
        "The health factor indicates the stability of a borrow position; below 1 the "
        "position can be liquidated. The liquidation threshold is the percentage of "
        "collateral value at which a loan becomes undercollateralized, while LTV is "
        "the maximum that can be borrowed against the collateral. For example, "
        "supplying $10,000 with an 80% liquidation threshold and borrowing $6,000 "
        "gives a health factor of 1.333. Read-only, no transaction is sent."
    )
    args_schema: Type[BaseModel] = _NoInput

    async def _arun(self) -> str:
        position = await self.actions.check_account_data()
        return format_account_summary(position)


class SupplyUsdcTool(_AmountTool):
    """Approve the pool for the USDC amount, then supply it as collateral."""

    name: str = "supply_usdc"
    description: str = (
        "Supplies (deposits as collateral) USDC to the Aave pool on Base Sepolia. "
        "Approves the pool to spend the USDC first, then supplies it. "
        f"{_EXPLORER_HINT} Supplying reduces the risk of liquidation."
    )
    action: str = "supply"


class BorrowUsdcTool(_AmountTool):
    """Borrow USDC at the variable rate. Single transaction, no approval."""

    name: str = "borrow_usdc"
    description: str = (
        "Borrows USDC from the Aave pool on Base Sepolia at the variable rate. "
        f"{_EXPLORER_HINT} Borrowing lowers the health factor, so get a fresh "
        "account overview afterwards and advise the user on the updated position."
    )
    action: str = "borrow"


class RepayUsdcTool(_AmountTool):
    """Approve the pool for the USDC amount, then repay variable-rate debt."""

    name: str = "repay_usdc"
    description: str = (
        "Repays USDC variable-rate debt to the Aave pool on Base Sepolia. "
        "Approves the pool to spend the USDC first, then repays. "
        f"{_EXPLORER_HINT} Repaying reduces the risk of the user's position."
    )
    action: str = "repay"


class WithdrawUsdcTool(_AmountTool):
    """Withdraw supplied USDC back to the wallet. Single transaction."""

    name: str = "withdraw_usdc"
    description: str = (
        "Withdraws supplied USDC from the Aave pool on Base Sepolia back to the "
        f"user's wallet. {_EXPLORER_HINT} Withdrawing reduces collateral and "
        "increases the risk of the user's borrow position."
    )
    action: str = "withdraw"


# ── Convenience bundle ────────────────────────────────────────────────────────

def get_tools(actions: Any) -> list[BaseTool]:
    """Return the five lending tools bound to ``actions``."""
    return [
        CheckAccountDataTool(actions=actions),
        SupplyUsdcTool(actions=actions),
        BorrowUsdcTool(actions=actions),
        RepayUsdcTool(actions=actions),
        WithdrawUsdcTool(actions=actions),
    ]
