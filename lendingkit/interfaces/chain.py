"""Chain protocols — read-only RPC and signed transaction abstractions."""
from typing import Any, Protocol, Sequence


class ChainClient(Protocol):
    """Abstract interface for read-only contract calls."""

    async def call_function(
        self,
        contract: str,
        signature: str,
        args: Sequence[Any],
        output_types: Sequence[str],
    ) -> tuple[Any, ...]: ...


class TransactionSender(Protocol):
    """Abstract interface for submitting state-changing contract calls.

    Both methods block; callers run them off the event loop.
    """

    @property
    def address(self) -> str: ...

    def send_call(self, contract: str, signature: str, args: Sequence[Any]) -> str: ...

    def wait_for_receipt(self, tx_hash: str) -> dict[str, Any]: ...
