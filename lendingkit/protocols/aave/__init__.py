"""Aave V3 lending pool."""
from .adapter import AaveV3Adapter, TransactionFailedError

__all__ = ["AaveV3Adapter", "TransactionFailedError"]
