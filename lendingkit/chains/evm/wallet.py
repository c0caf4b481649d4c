"""CDP wallet-backed transaction sender."""
import logging
from typing import TYPE_CHECKING, Any, Sequence

from eth_utils import to_checksum_address

from .client import encode_call

if TYPE_CHECKING:
    from coinbase_agentkit import CdpWalletProvider

logger = logging.getLogger(__name__)


class CdpWalletSigner:
    """Sign and submit contract calls through a CDP wallet provider."""

    def __init__(self, wallet_provider: "CdpWalletProvider") -> None:
        self._provider = wallet_provider
        self._address = wallet_provider.get_address()

    @property
    def address(self) -> str:
        return self._address

    def send_call(self, contract: str, signature: str, args: Sequence[Any]) -> str:
        """Submit the call and return the transaction hash without waiting."""
        data = encode_call(signature, args)
        tx_hash = self._provider.send_transaction(
            {"to": to_checksum_address(contract), "data": data}
        )
        logger.info("Submitted %s to %s: %s", signature, contract, tx_hash)
        return str(tx_hash)

    def wait_for_receipt(self, tx_hash: str) -> dict[str, Any]:
        """Block until the transaction is mined; uses the SDK's default timeout."""
        receipt = self._provider.wait_for_transaction_receipt(tx_hash)
        return dict(receipt)
