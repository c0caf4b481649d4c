"""Aave V3 adapter — reads the account position and issues pool transactions."""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Sequence

from ...constants import (
    AAVE_POOL_ADDRESS,
    APPROVE,
    BALANCE_OF,
    BORROW,
    GET_USER_ACCOUNT_DATA,
    REFERRAL_CODE,
    REPAY,
    SUPPLY,
    USDC_ADDRESS,
    USER_ACCOUNT_DATA_OUTPUTS,
    VARIABLE_RATE_MODE,
    WITHDRAW,
)
from ...interfaces.chain import ChainClient, TransactionSender
from ...models import (
    AccountPosition,
    ActionFailed,
    ActionResult,
    ApprovalFailed,
    Succeeded,
)
from . import parser

logger = logging.getLogger(__name__)


class TransactionFailedError(RuntimeError):
    """A transaction was mined but did not succeed."""


class AaveV3Adapter:
    """USDC lending operations for the wallet behind ``sender``.

    Supply and repay are two-phase: USDC approval first, then the pool call.
    A failed pool call after a confirmed approval is reported, not undone.
    """

    def __init__(self, chain_client: ChainClient, sender: TransactionSender) -> None:
        self._client = chain_client
        self._sender = sender

    @property
    def address(self) -> str:
        return self._sender.address

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def fetch_position(self, address: str) -> AccountPosition:
        """Fetch the pool account snapshot and USDC balance concurrently."""
        account_data, (balance,) = await asyncio.gather(
            self._client.call_function(
                AAVE_POOL_ADDRESS,
                GET_USER_ACCOUNT_DATA,
                [address],
                USER_ACCOUNT_DATA_OUTPUTS,
            ),
            self._client.call_function(
                USDC_ADDRESS, BALANCE_OF, [address], ("uint256",)
            ),
        )
        position = parser.decode_account_data(address, account_data, balance)
        logger.info(
            "Position for %s — collateral: %d  debt: %d  HF: %d",
            address,
            position.total_collateral_base,
            position.total_debt_base,
            position.health_factor,
        )
        return position

    async def check_account_data(self) -> AccountPosition:
        return await self.fetch_position(self.address)

    # ------------------------------------------------------------------
    # Transactions
    # ------------------------------------------------------------------

    async def _transact(
        self, contract: str, signature: str, args: Sequence[Any]
    ) -> str:
        """Submit a call, wait for the receipt and return the confirmed hash."""
        tx_hash = await asyncio.to_thread(
            self._sender.send_call, contract, signature, args
        )
        receipt = await asyncio.to_thread(self._sender.wait_for_receipt, tx_hash)
        if receipt.get("status") != 1:
            raise TransactionFailedError(f"Transaction {tx_hash} reverted")
        return tx_hash

    async def _single_call(
        self, action: str, signature: str, args: Sequence[Any]
    ) -> ActionResult:
        try:
            tx_hash = await self._transact(AAVE_POOL_ADDRESS, signature, args)
        except Exception as e:
            logger.error("Error during %s: %s", action, e)
            return ActionFailed(error=str(e))
        logger.info("%s confirmed: %s", action, tx_hash)
        return Succeeded(tx_hash=tx_hash)

    async def _approve_then_call(
        self, action: str, amount: int, signature: str, args: Sequence[Any]
    ) -> ActionResult:
        try:
            approval_hash = await self._transact(
                USDC_ADDRESS, APPROVE, [AAVE_POOL_ADDRESS, amount]
            )
        except Exception as e:
            logger.error("USDC approval for %s failed: %s", action, e)
            return ApprovalFailed(error=str(e))
        logger.info("Approved USDC spend: %s", approval_hash)

        try:
            tx_hash = await self._transact(AAVE_POOL_ADDRESS, signature, args)
        except Exception as e:
            logger.error(
                "Error during %s after approval %s: %s", action, approval_hash, e
            )
            return ActionFailed(error=str(e), approval_tx_hash=approval_hash)
        logger.info("%s confirmed: %s", action, tx_hash)
        return Succeeded(tx_hash=tx_hash, approval_tx_hash=approval_hash)

    async def supply(self, amount: str) -> ActionResult:
        value = parser.parse_amount(amount)
        return await self._approve_then_call(
            "supply",
            value,
            SUPPLY,
            [USDC_ADDRESS, value, self.address, REFERRAL_CODE],
        )

    async def borrow(self, amount: str) -> ActionResult:
        value = parser.parse_amount(amount)
        return await self._single_call(
            "borrow",
            BORROW,
            [USDC_ADDRESS, value, VARIABLE_RATE_MODE, REFERRAL_CODE, self.address],
        )

    async def repay(self, amount: str) -> ActionResult:
        value = parser.parse_amount(amount)
        return await self._approve_then_call(
            "repay",
            value,
            REPAY,
            [USDC_ADDRESS, value, VARIABLE_RATE_MODE, self.address],
        )

    async def withdraw(self, amount: str) -> ActionResult:
        value = parser.parse_amount(amount)
        return await self._single_call(
            "withdraw",
            WITHDRAW,
            [USDC_ADDRESS, value, self.address],
        )
