"""Integration tests for the Aave V3 adapter — reads and transaction flows."""
from __future__ import annotations

import asyncio
from typing import Any, Sequence

import pytest

from lendingkit.constants import (
    AAVE_POOL_ADDRESS,
    REFERRAL_CODE,
    USDC_ADDRESS,
    VARIABLE_RATE_MODE,
)
from lendingkit.models import ActionFailed, ApprovalFailed, Succeeded
from lendingkit.protocols.aave import AaveV3Adapter
from lendingkit.protocols.aave.parser import InvalidAmountError

WALLET = "0x1111111111111111111111111111111111111111"


@pytest.fixture()
def chain_client(make_chain_client):
    return make_chain_client()


@pytest.fixture()
def sender(make_sender):
    return make_sender()


@pytest.fixture()
def adapter(chain_client, sender) -> AaveV3Adapter:
    return AaveV3Adapter(chain_client, sender)


class TestFetchPosition:
    @pytest.mark.asyncio
    async def test_combines_account_data_and_balance(self, adapter, chain_client) -> None:
        position = await adapter.fetch_position(WALLET)
        assert position.total_collateral_base == 10_000_00000000
        assert position.total_debt_base == 6_000_00000000
        assert position.health_factor == 1_333000000000000000
        assert position.usdc_balance == 500_000000
        assert position.address == WALLET

        contracts = sorted(call[0] for call in chain_client.calls)
        assert contracts == sorted([AAVE_POOL_ADDRESS, USDC_ADDRESS])

    @pytest.mark.asyncio
    async def test_reads_run_concurrently(self, sample_account_data, sender) -> None:
        started: list[str] = []
        both_started = asyncio.Event()

        class SlowClient:
            async def call_function(
                self,
                contract: str,
                signature: str,
                args: Sequence[Any],
                output_types: Sequence[str],
            ) -> tuple[Any, ...]:
                started.append(signature)
                if len(started) == 2:
                    both_started.set()
                await asyncio.wait_for(both_started.wait(), timeout=1)
                if signature.startswith("balanceOf"):
                    return (1,)
                return sample_account_data

        position = await AaveV3Adapter(SlowClient(), sender).fetch_position(WALLET)
        assert position.usdc_balance == 1

    @pytest.mark.asyncio
    async def test_read_error_propagates(self, sender) -> None:
        class FailingClient:
            async def call_function(self, *args: Any) -> tuple[Any, ...]:
                raise ConnectionError("node unreachable")

        with pytest.raises(ConnectionError):
            await AaveV3Adapter(FailingClient(), sender).fetch_position(WALLET)


class TestCheckAccountData:
    @pytest.mark.asyncio
    async def test_uses_own_address(self, adapter, chain_client) -> None:
        await adapter.check_account_data()
        assert all(call[2] == (WALLET,) for call in chain_client.calls)

    @pytest.mark.asyncio
    async def test_never_sends_transactions(self, adapter, sender) -> None:
        await adapter.check_account_data()
        assert sender.sent == []

    @pytest.mark.asyncio
    async def test_repeated_reads_are_identical(self, adapter) -> None:
        first = await adapter.check_account_data()
        second = await adapter.check_account_data()
        assert first == second


class TestSupply:
    @pytest.mark.asyncio
    async def test_approves_then_supplies(self, adapter, sender) -> None:
        result = await adapter.supply("100")

        assert sender.signatures == ["approve", "supply"]
        approve, supply = sender.sent
        assert approve[0] == USDC_ADDRESS
        assert approve[2] == (AAVE_POOL_ADDRESS, 100_000000)
        assert supply[0] == AAVE_POOL_ADDRESS
        assert supply[2] == (USDC_ADDRESS, 100_000000, WALLET, REFERRAL_CODE)

        assert isinstance(result, Succeeded)
        assert result.tx_hash == f"0x{2:064x}"
        assert result.approval_tx_hash == f"0x{1:064x}"

    @pytest.mark.asyncio
    async def test_rejected_approval_skips_supply(self, chain_client, make_sender) -> None:
        sender = make_sender(reject=["approve"])
        result = await AaveV3Adapter(chain_client, sender).supply("100")

        assert isinstance(result, ApprovalFailed)
        assert "rejected" in result.error
        assert sender.signatures == ["approve"]

    @pytest.mark.asyncio
    async def test_reverted_approval_skips_supply(self, chain_client, make_sender) -> None:
        sender = make_sender(revert=["approve"])
        result = await AaveV3Adapter(chain_client, sender).supply("100")

        assert isinstance(result, ApprovalFailed)
        assert "reverted" in result.error
        assert len(sender.sent) == 1

    @pytest.mark.asyncio
    async def test_supply_failure_after_approval(self, chain_client, make_sender) -> None:
        sender = make_sender(revert=["supply"])
        result = await AaveV3Adapter(chain_client, sender).supply("100")

        assert isinstance(result, ActionFailed)
        assert result.approval_tx_hash == f"0x{1:064x}"
        # The allowance is left in place: no further calls after the failure.
        assert sender.signatures == ["approve", "supply"]

    @pytest.mark.asyncio
    async def test_truncates_to_token_precision(self, adapter, sender) -> None:
        await adapter.supply("1.23456789")
        assert sender.sent[0][2][1] == 1_234567
        assert sender.sent[1][2][1] == 1_234567


class TestRepay:
    @pytest.mark.asyncio
    async def test_approves_then_repays(self, adapter, sender) -> None:
        result = await adapter.repay("25.5")

        assert sender.signatures == ["approve", "repay"]
        assert sender.sent[1][2] == (USDC_ADDRESS, 25_500000, VARIABLE_RATE_MODE, WALLET)
        assert isinstance(result, Succeeded)

    @pytest.mark.asyncio
    async def test_failed_approval_never_repays(self, chain_client, make_sender) -> None:
        sender = make_sender(reject=["approve"])
        result = await AaveV3Adapter(chain_client, sender).repay("10")

        assert isinstance(result, ApprovalFailed)
        assert "repay" not in sender.signatures

    @pytest.mark.asyncio
    async def test_repay_failure_after_approval(self, chain_client, make_sender) -> None:
        sender = make_sender(reject=["repay"])
        result = await AaveV3Adapter(chain_client, sender).repay("10")

        assert isinstance(result, ActionFailed)
        assert result.approval_tx_hash is not None


class TestBorrow:
    @pytest.mark.asyncio
    async def test_single_call_without_approval(self, adapter, sender) -> None:
        result = await adapter.borrow("50")

        assert sender.signatures == ["borrow"]
        contract, _, args = sender.sent[0]
        assert contract == AAVE_POOL_ADDRESS
        assert args == (USDC_ADDRESS, 50_000000, VARIABLE_RATE_MODE, REFERRAL_CODE, WALLET)
        assert result == Succeeded(tx_hash=f"0x{1:064x}")

    @pytest.mark.asyncio
    async def test_failure_is_action_failed(self, chain_client, make_sender) -> None:
        sender = make_sender(revert=["borrow"])
        result = await AaveV3Adapter(chain_client, sender).borrow("50")

        assert isinstance(result, ActionFailed)
        assert result.approval_tx_hash is None
        assert len(sender.sent) == 1


class TestWithdraw:
    @pytest.mark.asyncio
    async def test_single_call_to_own_address(self, adapter, sender) -> None:
        result = await adapter.withdraw("5")

        assert sender.signatures == ["withdraw"]
        assert sender.sent[0][2] == (USDC_ADDRESS, 5_000000, WALLET)
        assert isinstance(result, Succeeded)
        assert result.approval_tx_hash is None

    @pytest.mark.asyncio
    async def test_wallet_rejection(self, chain_client, make_sender) -> None:
        sender = make_sender(reject=["withdraw"])
        result = await AaveV3Adapter(chain_client, sender).withdraw("5")

        assert isinstance(result, ActionFailed)
        assert "rejected" in result.error


class TestInvalidAmounts:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("method", ["supply", "borrow", "repay", "withdraw"])
    @pytest.mark.parametrize("amount", ["abc", "0", "-1", "", "５", "١٠٠"])
    async def test_rejected_before_any_call(
        self, adapter, sender, method: str, amount: str
    ) -> None:
        with pytest.raises(InvalidAmountError):
            await getattr(adapter, method)(amount)
        assert sender.sent == []
