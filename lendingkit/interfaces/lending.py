"""Lending actions protocol — one method per agent tool."""
from typing import Protocol

from ..models import AccountPosition, ActionResult


class LendingActions(Protocol):
    """Operations the agent may invoke against the caller's own position."""

    async def check_account_data(self) -> AccountPosition: ...

    async def supply(self, amount: str) -> ActionResult: ...

    async def borrow(self, amount: str) -> ActionResult: ...

    async def repay(self, amount: str) -> ActionResult: ...

    async def withdraw(self, amount: str) -> ActionResult: ...
