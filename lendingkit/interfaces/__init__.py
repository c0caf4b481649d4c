"""Protocol interfaces for the lending agent."""
from .chain import ChainClient, TransactionSender
from .lending import LendingActions

__all__ = ["ChainClient", "LendingActions", "TransactionSender"]
